from abc import ABC, abstractmethod


class StorageReader(ABC):
    """
    Read-only access to contract storage, as served by an Ethereum node.
    Implementations report failures by raising; they never retry or cache.
    """

    @abstractmethod
    async def block_number(self) -> int:
        """
        Return the number of the current chain head.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        """
        Return the raw 32-byte word stored at `slot` of `address` as of `block_number`.

        :param address: Checksummed contract address.
        :param slot: Storage slot index.
        :param block_number: Block the read is pinned to.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """
        Release transport resources. Default: nothing to release.
        """
        return None
