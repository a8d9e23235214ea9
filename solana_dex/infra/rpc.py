"""
RPC Client for Solana

Provides a JSON-RPC interface with:
- Multiple endpoint fallback
- One attempt per endpoint by default (RPC_MAX_RETRIES)
- Request timeout management
"""

from __future__ import annotations

import base64
import logging
import time
import threading
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass

import httpx

from ..errors import RpcError, ConfigurationError, ErrorCode
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass
class RpcClientConfig:
    """
    RPC client runtime configuration

    Allows per-client overrides while pulling defaults from the global
    config (solana_dex.config.RpcConfig).

    Usage:
        client = RpcClient(endpoint)

        config = RpcClientConfig(timeout_seconds=60, commitment="finalized")
        client = RpcClient(endpoint, config=config)
    """
    timeout_seconds: float = None
    max_retries: int = None
    retry_delay_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.rpc.timeout_seconds
        if self.max_retries is None:
            self.max_retries = global_config.rpc.max_retries
        if self.retry_delay_seconds is None:
            self.retry_delay_seconds = global_config.rpc.retry_delay_seconds
        if self.commitment is None:
            self.commitment = global_config.rpc.commitment


class RpcClient:
    """
    Solana JSON-RPC client

    Supports:
    - Multiple RPC endpoints with automatic fallback
    - A single attempt per endpoint unless RPC_MAX_RETRIES is raised;
      a 429 moves on to the next endpoint
    - Configurable timeouts

    Usage:
        rpc = RpcClient("https://api.mainnet-beta.solana.com")

        lamports = rpc.get_balance("Address...")
        result = rpc.call("getSlot", [])
    """

    def __init__(
        self,
        endpoint: Union[str, List[str]],
        config: Optional[RpcClientConfig] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL or list of URLs (for fallback)
            config: RPC configuration options
        """
        self._endpoints = [endpoint] if isinstance(endpoint, str) else list(endpoint)
        self._endpoints = [e for e in self._endpoints if e]
        if not self._endpoints:
            raise ConfigurationError.missing("RPC endpoint")

        self._config = config or RpcClientConfig()
        self._current_endpoint_idx = 0
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        """Current active endpoint"""
        return self._endpoints[self._current_endpoint_idx]

    @property
    def commitment(self) -> str:
        """Default commitment level"""
        return self._config.commitment

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._config.timeout_seconds,
                        headers={"Content-Type": "application/json"},
                    )
        return self._client

    def _rotate_endpoint(self):
        """Rotate to next endpoint on failure"""
        if len(self._endpoints) > 1:
            self._current_endpoint_idx = (self._current_endpoint_idx + 1) % len(self._endpoints)
            logger.info(f"Rotating to RPC endpoint: {self.endpoint}")

    def call(
        self,
        method: str,
        params: List[Any],
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Make JSON-RPC call

        Each endpoint gets max_retries attempts (1 by default), then the
        next endpoint is tried. Node errors are raised without retrying.

        Args:
            method: RPC method name
            params: RPC parameters
            timeout: Optional timeout override

        Returns:
            RPC result

        Raises:
            RpcError: On RPC failure
        """
        client = self._get_client()
        body = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }

        last_error: Optional[Exception] = None
        endpoints_tried = 0
        max_endpoints = len(self._endpoints)
        attempts = max(self._config.max_retries, 1)
        timeout_val = timeout or self._config.timeout_seconds

        while endpoints_tried < max_endpoints:
            for attempt in range(attempts):
                try:
                    response = client.post(
                        self.endpoint,
                        json=body,
                        timeout=timeout_val,
                    )

                    if response.status_code == 429:
                        logger.warning(f"Rate limited by {self.endpoint}")
                        last_error = RpcError.rate_limited(self.endpoint)
                        if attempt < attempts - 1:
                            time.sleep(self._config.retry_delay_seconds * (attempt + 1))
                        continue

                    response.raise_for_status()
                    result = response.json()

                    if "error" in result:
                        error = result["error"]
                        error_msg = error.get("message", str(error))
                        rpc_error = RpcError(
                            f"RPC error: {error_msg}",
                            code=ErrorCode.RPC_INVALID_RESPONSE,
                            endpoint=self.endpoint,
                        )
                        # Node-side errors are answers, not transport failures
                        rpc_error.recoverable = False
                        rpc_error.details["rpc_error_code"] = error.get("code")
                        rpc_error.details["rpc_error_data"] = error.get("data")
                        raise rpc_error

                    return result.get("result")

                except httpx.TimeoutException:
                    last_error = RpcError.timeout(self.endpoint, timeout_val)
                    logger.warning(f"RPC timeout (attempt {attempt + 1}): {self.endpoint}")

                except httpx.HTTPStatusError as e:
                    last_error = RpcError(
                        f"HTTP error {e.response.status_code}",
                        endpoint=self.endpoint,
                        original_error=e,
                    )
                    logger.warning(f"RPC HTTP error (attempt {attempt + 1}): {e}")

                except httpx.RequestError as e:
                    last_error = RpcError.connection_failed(self.endpoint, e)
                    logger.warning(f"RPC connection error (attempt {attempt + 1}): {e}")

                except RpcError:
                    raise

                except ValueError as e:
                    last_error = RpcError(
                        f"Invalid JSON-RPC response: {e}",
                        code=ErrorCode.RPC_INVALID_RESPONSE,
                        endpoint=self.endpoint,
                        original_error=e,
                    )

                if attempt < attempts - 1:
                    time.sleep(self._config.retry_delay_seconds * (attempt + 1))

            self._rotate_endpoint()
            endpoints_tried += 1

        raise last_error or RpcError("All RPC endpoints failed")

    def get_account_info(
        self,
        address: str,
        encoding: str = "base64",
        commitment: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get account information

        Args:
            address: Account address (base58)
            encoding: Data encoding ("base64", "jsonParsed", etc.)
            commitment: Commitment level

        Returns:
            Account info or None if the account does not exist
        """
        params = [
            address,
            {
                "encoding": encoding,
                "commitment": commitment or self.commitment,
            },
        ]
        result = self.call("getAccountInfo", params)
        return result.get("value") if result else None

    def get_latest_blockhash(
        self,
        commitment: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get latest blockhash

        Returns:
            Dict with blockhash and lastValidBlockHeight
        """
        params = [{"commitment": commitment or self.commitment}]
        result = self.call("getLatestBlockhash", params)
        return result.get("value", {}) if result else {}

    def get_balance(
        self,
        address: str,
        commitment: Optional[str] = None,
    ) -> int:
        """
        Get SOL balance in lamports

        Args:
            address: Account address

        Returns:
            Balance in lamports
        """
        params = [address, {"commitment": commitment or self.commitment}]
        result = self.call("getBalance", params)
        return result.get("value", 0) if result else 0

    def get_token_account_balance(
        self,
        token_account: str,
        commitment: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get SPL token account balance

        Args:
            token_account: Token account address

        Returns:
            Balance info with amount, decimals, uiAmount
        """
        params = [token_account, {"commitment": commitment or self.commitment}]
        result = self.call("getTokenAccountBalance", params)
        return result.get("value", {}) if result else {}

    def send_transaction(
        self,
        transaction: bytes,
        skip_preflight: bool = False,
        preflight_commitment: Optional[str] = None,
    ) -> str:
        """
        Send signed transaction

        Args:
            transaction: Signed transaction bytes
            skip_preflight: Skip preflight simulation
            preflight_commitment: Preflight commitment level

        Returns:
            Transaction signature (base58)
        """
        tx_data = base64.b64encode(transaction).decode("ascii")

        params = [
            tx_data,
            {
                "skipPreflight": skip_preflight,
                "preflightCommitment": preflight_commitment or self.commitment,
                "encoding": "base64",
            },
        ]
        return self.call("sendTransaction", params)

    def confirm_transaction(
        self,
        signature: str,
        commitment: Optional[str] = None,
        timeout_seconds: float = 60.0,
        poll_interval: float = 1.0,
    ) -> Optional[bool]:
        """
        Wait for transaction confirmation

        Args:
            signature: Transaction signature
            commitment: Commitment level to wait for
            timeout_seconds: Max wait time
            poll_interval: Delay between status checks

        Returns:
            True if confirmed successfully
            False if transaction failed on-chain (has error)
            None if timeout (transaction never landed or status unknown)
        """
        target = commitment or self.commitment
        accepted = ("confirmed", "finalized") if target != "finalized" else ("finalized",)
        start_time = time.time()
        last_status = None

        while time.time() - start_time < timeout_seconds:
            try:
                result = self.call(
                    "getSignatureStatuses",
                    [[signature]],
                )
                if result and result.get("value"):
                    status = result["value"][0]
                    if status:
                        last_status = status
                        if status.get("err"):
                            logger.warning(
                                f"Transaction {signature} failed on-chain: {status.get('err')}"
                            )
                            return False
                        if status.get("confirmationStatus") in accepted:
                            return True
            except RpcError as e:
                logger.debug(f"Error checking transaction status: {e}")

            time.sleep(poll_interval)

        if last_status is None:
            logger.warning(
                f"Transaction {signature} was never seen on chain (dropped/expired)"
            )
        else:
            logger.warning(
                f"Transaction {signature} timeout. Last status: {last_status.get('confirmationStatus', 'unknown')}"
            )

        return None

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
