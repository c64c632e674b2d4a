import os
from dotenv import load_dotenv
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

load_dotenv()


class ConfigError(Exception):
    """Raised when the environment does not describe a runnable service."""


class MissingRPCEndpointError(ConfigError):
    def __init__(self):
        super().__init__("missing ETH_RPC_URL environment variable")


@dataclass(frozen=True)
class Settings:
    # chain
    RPC_URL: str
    RPC_TIMEOUT_SEC: float = 15.0

    # http
    ADDR: str = ":1337"

    # generic
    LOG_LEVEL: str = "info"

    def listen_host_port(self) -> Tuple[str, int]:
        """
        Split ADDR ("host:port", ":port") into uvicorn's host and port.
        An empty host binds every interface.
        """
        return parse_addr(self.ADDR)


def parse_addr(addr: str) -> Tuple[str, int]:
    host, sep, port = addr.strip().rpartition(":")
    if not sep:
        raise ConfigError(f"invalid ADDR {addr!r}: expected host:port")
    try:
        port_num = int(port)
    except ValueError:
        raise ConfigError(f"invalid ADDR {addr!r}: port must be an integer")
    if not 0 < port_num < 65536:
        raise ConfigError(f"invalid ADDR {addr!r}: port out of range")
    return (host or "0.0.0.0"), port_num


def _float(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"invalid {name}: {raw!r}")
    if value <= 0:
        raise ConfigError(f"invalid {name}: must be > 0")
    return value


def load_settings() -> Settings:
    """
    Read settings from the process environment.

    Required:
      - ETH_RPC_URL: Ethereum node JSON-RPC URL
    Optional:
      - ADDR (default ":1337"), LOG_LEVEL (default "info"),
        RPC_TIMEOUT_SEC (default 15)
    """
    rpc_url = os.environ.get("ETH_RPC_URL", "").strip()
    if not rpc_url:
        raise MissingRPCEndpointError()

    addr = os.environ.get("ADDR") or ":1337"
    parse_addr(addr)

    return Settings(
        RPC_URL=rpc_url,
        RPC_TIMEOUT_SEC=_float("RPC_TIMEOUT_SEC", "15"),
        ADDR=addr,
        LOG_LEVEL=os.environ.get("LOG_LEVEL") or "info",
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
