"""Abstract base class for mapping store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Mapping


class MappingStoreBase(ABC):
    """Durable relation from token to mapping.
    
    Implementations must enforce token uniqueness themselves (e.g. with a
    UNIQUE constraint) so that of two concurrent inserts of the same token
    exactly one succeeds.
    """
    
    def __init__(self, db_config: str):
        """Initialize store.
        
        Args:
            db_config: Database location (file path or connection string)
        """
        self.db_config = db_config
    
    @abstractmethod
    async def initialize(self) -> None:
        """Open connections and create tables if configured to.
        
        Raises:
            StorageUnavailableError: If the store cannot be opened
        """
        pass
    
    @abstractmethod
    async def get(self, short: str) -> Optional[Mapping]:
        """Look up a mapping by token.
        
        Args:
            short: The token to lookup
            
        Returns:
            The mapping, or None if no such token exists
            
        Raises:
            StorageUnavailableError: If the store cannot be queried
        """
        pass
    
    @abstractmethod
    async def insert(self, mapping: Mapping) -> None:
        """Insert a new mapping.
        
        Args:
            mapping: The mapping to persist
            
        Raises:
            UniquenessViolationError: If the token is already taken
            StorageUnavailableError: On any other storage failure
        """
        pass
    
    @abstractmethod
    async def list_all(self) -> List[Mapping]:
        """Return every mapping, in insertion order.
        
        Raises:
            StorageUnavailableError: If the store cannot be queried
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass
