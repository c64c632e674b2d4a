import logging
from typing import Optional

from aiohttp import ClientTimeout
from web3 import AsyncWeb3, AsyncHTTPProvider

from .base import StorageReader


class Web3StorageReader(StorageReader):
    """
    StorageReader over a JSON-RPC node (eth_blockNumber / eth_getStorageAt).
    """

    def __init__(self, rpc_url: str, timeout_sec: float = 15.0, logger: Optional[logging.Logger] = None):
        self._rpc_url = rpc_url
        self._timeout = timeout_sec
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self.w3 = AsyncWeb3(
            AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": ClientTimeout(total=timeout_sec)})
        )

    async def connect(self) -> None:
        """
        Fail fast when the node is unreachable, so the service does not start
        answering requests it cannot serve.
        """
        if not await self.w3.is_connected():
            raise ConnectionError(f"failed to connect to Ethereum node at {self._rpc_url}")
        chain_id = await self.w3.eth.chain_id
        self._logger.info("Connected to Ethereum node (chain_id=%s)", chain_id)

    async def block_number(self) -> int:
        return int(await self.w3.eth.block_number)

    async def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        word = await self.w3.eth.get_storage_at(
            AsyncWeb3.to_checksum_address(address), slot, block_identifier=block_number
        )
        return bytes(word)

    async def close(self) -> None:
        await self.w3.provider.disconnect()
