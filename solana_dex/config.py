"""
Configuration management for the Solana DEX client

Loads settings from environment variables and .env file.
Includes logging configuration with file output support.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # solana_dex package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class RpcConfig:
    """RPC client configuration"""
    url: str = field(default_factory=lambda: _get_env("SOLANA_RPC_URL", ""))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))
    # Attempts per endpoint; the client itself never retries swaps or transfers
    max_retries: int = field(default_factory=lambda: _get_env_int("RPC_MAX_RETRIES", 1))
    retry_delay_seconds: float = field(default_factory=lambda: _get_env_float("RPC_RETRY_DELAY_SECONDS", 1.0))
    commitment: str = field(default_factory=lambda: _get_env("RPC_COMMITMENT", "confirmed"))


@dataclass
class SignerConfig:
    """Wallet identity configuration"""
    secret_key: str = field(default_factory=lambda: _get_env("WALLET_SECRET_KEY", ""))
    keypair_path: str = field(default_factory=lambda: _get_env("SOLANA_KEYPAIR_PATH", ""))


@dataclass
class TxConfig:
    """Transaction configuration for locally built transactions"""
    compute_units: int = field(default_factory=lambda: _get_env_int("TX_COMPUTE_UNITS", 200_000))
    # Priority fee for transfers and account creation (microlamports/CU, 0 = none)
    compute_unit_price: int = field(default_factory=lambda: _get_env_int("TX_COMPUTE_UNIT_PRICE", 0))
    confirmation_timeout: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_TIMEOUT", 60.0))
    confirmation_poll_interval: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_POLL_INTERVAL", 1.0))
    skip_preflight: bool = field(default_factory=lambda: _get_env_bool("TX_SKIP_PREFLIGHT", False))
    # Swap payloads are broadcast without simulation, as the build API already simulated them
    swap_skip_preflight: bool = field(default_factory=lambda: _get_env_bool("TX_SWAP_SKIP_PREFLIGHT", True))
    preflight_commitment: str = field(default_factory=lambda: _get_env("TX_PREFLIGHT_COMMITMENT", "confirmed"))


@dataclass
class RaydiumConfig:
    """Raydium trade API configuration"""
    base_host: str = field(default_factory=lambda: _get_env("RAYDIUM_BASE_HOST", "https://api-v3.raydium.io"))
    swap_host: str = field(default_factory=lambda: _get_env("RAYDIUM_SWAP_HOST", "https://transaction-v1.raydium.io"))
    priority_fee_path: str = field(default_factory=lambda: _get_env("RAYDIUM_PRIORITY_FEE_PATH", "/main/auto-fee"))
    mint_info_path: str = field(default_factory=lambda: _get_env("RAYDIUM_MINT_INFO_PATH", "/mint/ids"))
    # "V0" for versioned transactions, "LEGACY" otherwise
    tx_version: str = field(default_factory=lambda: _get_env("RAYDIUM_TX_VERSION", "V0"))
    # Fee tier from the auto-fee response: vh, h or m
    priority_fee_tier: str = field(default_factory=lambda: _get_env("RAYDIUM_PRIORITY_FEE_TIER", "h"))
    timeout: float = field(default_factory=lambda: _get_env_float("RAYDIUM_TIMEOUT", 30.0))


@dataclass
class PriceConfig:
    """Token price API configuration"""
    url: str = field(default_factory=lambda: _get_env("PRICE_API_URL", "https://api.jup.ag/price/v2"))
    timeout: float = field(default_factory=lambda: _get_env_float("PRICE_API_TIMEOUT", 10.0))
    poll_interval_ms: int = field(default_factory=lambda: _get_env_int("PRICE_POLL_INTERVAL_MS", 1000))


@dataclass
class TradingConfig:
    """Default trading parameters"""
    default_slippage_bps: int = field(default_factory=lambda: _get_env_int("DEFAULT_SLIPPAGE_BPS", 100))
    # SOL kept back for network fees (0.01 SOL)
    fee_reserve_lamports: int = field(default_factory=lambda: _get_env_int("FEE_RESERVE_LAMPORTS", 10_000_000))
    explorer_url: str = field(default_factory=lambda: _get_env("EXPLORER_TX_URL", "https://solscan.io/tx/"))


def _get_default_log_path() -> str:
    """Get default log file path under solana_dex/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"solana_dex_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output support.

    File logging is off unless LOG_FILE is set or enable_file_logging() is
    called, so importing the library never writes to disk.

    Environment variables:
        LOG_FILE: Path to log file
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))

    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))

    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))

    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Loads all settings from environment variables and .env file.

    Usage:
        from solana_dex.config import config

        print(config.rpc.url)
        print(config.raydium.swap_host)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    raydium: RaydiumConfig = field(default_factory=RaydiumConfig)
    price: PriceConfig = field(default_factory=PriceConfig)
    trading: TradingConfig = field(default_factory=TradingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Get global configuration instance"""
    return config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global config
    config = Config.reload()
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "solana_dex",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: solana_dex)

    Returns:
        Configured logger instance

    Example:
        from solana_dex.config import LoggingConfig, setup_logging
        logger = setup_logging(LoggingConfig(log_file="dex.log", log_level="DEBUG"))
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close handlers before removing them to release file handles on reload
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Child loggers inherit handlers from the parent
    for name in [
        f"{logger_name}.infra",
        f"{logger_name}.modules",
        f"{logger_name}.protocols",
    ]:
        logging.getLogger(name).setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """
    Quick setup for file logging.

    Args:
        log_file: Path to log file (defaults to solana_dex/log/solana_dex_<utc>.log)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        console: Also output to console

    Returns:
        Configured logger
    """
    if log_file is None:
        log_file = config.logging.log_file or _get_default_log_path()

    log_config = LoggingConfig(
        log_file=log_file,
        log_level=level,
        console_output=console,
    )
    return setup_logging(log_config)
