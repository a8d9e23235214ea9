"""
SPL instruction builders

Associated token account derivation and creation, native SOL transfer and
checked token transfer. Account orders follow the on-chain programs.
"""

import struct
from typing import Optional

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from .constants import (
    TOKEN_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    ATA_CREATE,
    ATA_CREATE_IDEMPOTENT,
    SYSTEM_TRANSFER,
    TOKEN_TRANSFER_CHECKED,
)


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Optional[Pubkey] = None,
) -> Pubkey:
    """
    Get associated token account address.

    Args:
        owner: Wallet owner
        mint: Token mint
        token_program: Token program (defaults to Tokenkeg)

    Returns:
        ATA address
    """
    ata_program = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    seeds = [
        bytes(owner),
        bytes(token_program),
        bytes(mint),
    ]

    address, _ = Pubkey.find_program_address(seeds, ata_program)
    return address


def build_create_ata_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program: Optional[Pubkey] = None,
    idempotent: bool = False,
) -> Instruction:
    """
    Build create_associated_token_account instruction.

    The plain variant fails when the account already exists; the
    idempotent variant does nothing in that case.

    Args:
        payer: Fee payer
        owner: Account owner
        mint: Token mint
        token_program: Token program (defaults to Tokenkeg)
        idempotent: Use the create-idempotent variant

    Returns:
        Instruction to create ATA
    """
    ata_program = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
    system_program = Pubkey.from_string(SYSTEM_PROGRAM_ID)

    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    ata_address = get_associated_token_address(owner, mint, token_program)

    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(ata_address, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(system_program, is_signer=False, is_writable=False),
        AccountMeta(token_program, is_signer=False, is_writable=False),
    ]

    data = bytes([ATA_CREATE_IDEMPOTENT]) if idempotent else bytes([ATA_CREATE])
    return Instruction(ata_program, data, accounts)


def build_transfer_sol_instruction(
    source: Pubkey,
    destination: Pubkey,
    lamports: int,
) -> Instruction:
    """System program transfer of native SOL"""
    accounts = [
        AccountMeta(source, is_signer=True, is_writable=True),
        AccountMeta(destination, is_signer=False, is_writable=True),
    ]
    data = struct.pack("<I", SYSTEM_TRANSFER) + struct.pack("<Q", lamports)
    return Instruction(Pubkey.from_string(SYSTEM_PROGRAM_ID), data, accounts)


def build_transfer_checked_instruction(
    source: Pubkey,
    mint: Pubkey,
    destination: Pubkey,
    owner: Pubkey,
    amount: int,
    decimals: int,
    token_program: Optional[Pubkey] = None,
) -> Instruction:
    """
    Build SPL token TransferChecked instruction.

    The token program rejects the transfer if decimals do not match the
    mint, which guards against amount scaling mistakes.

    Args:
        source: Sender token account
        mint: Token mint
        destination: Recipient token account
        owner: Sender wallet (signer)
        amount: Amount in smallest units
        decimals: Mint decimals
        token_program: Token program (defaults to Tokenkeg)

    Returns:
        TransferChecked instruction
    """
    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    accounts = [
        AccountMeta(source, is_signer=False, is_writable=True),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(destination, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=True, is_writable=False),
    ]
    data = bytes([TOKEN_TRANSFER_CHECKED]) + struct.pack("<Q", amount) + bytes([decimals])
    return Instruction(token_program, data, accounts)
