"""Business logic service for tldr."""

import logging
from typing import Dict, List, Optional

from .common.validators import normalize_url
from .database.base import MappingStoreBase
from .database.models import Mapping
from .exceptions import (
    ExhaustedRetriesError,
    MappingInvalidError,
    MappingNotFoundError,
    UniquenessViolationError,
)
from .tokens import TokenGenerator


class ShortenerService:
    """Service layer for minting and resolving short URLs."""
    
    def __init__(
        self,
        store: MappingStoreBase,
        token_generator: Optional[TokenGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_mint_attempts: int = 10,
    ):
        """Initialize shortener service.
        
        Args:
            store: Mapping store instance
            token_generator: Optional token generator
            logger: Optional logger
            max_mint_attempts: Maximum candidate tokens tried per mint
        """
        if max_mint_attempts < 1:
            raise ValueError("max_mint_attempts must be at least 1")
        
        self.store = store
        self.generator = token_generator or TokenGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_mint_attempts = max_mint_attempts
    
    async def mint(self, destination: str) -> Mapping:
        """Create a new mapping under a fresh, unused token.
        
        Args:
            destination: The URL to shorten (normalized before storing)
            
        Returns:
            The persisted mapping
            
        Raises:
            InvalidURLError: If the URL is not valid
            StorageUnavailableError: If the store fails
            ExhaustedRetriesError: If no free token was found
        """
        url = normalize_url(destination)
        if url != destination:
            self.logger.debug(f"Normalized URL: {destination!r} -> {url}")
        
        for attempt in range(1, self.max_mint_attempts + 1):
            short = self.generator.generate()
            
            if await self.store.get(short) is not None:
                self.logger.warning(f"Token collision on lookup (attempt {attempt}): {short}")
                continue
            
            mapping = Mapping(url=url, short=short, valid=True)
            try:
                await self.store.insert(mapping)
            except UniquenessViolationError:
                # Another writer took the token between lookup and insert
                self.logger.warning(f"Token collision on insert (attempt {attempt}): {short}")
                continue
            
            self.logger.info(f"Created short URL: {short} -> {url}")
            return mapping
        
        self.logger.error(f"Gave up minting a token for {url} after {self.max_mint_attempts} attempts")
        raise ExhaustedRetriesError(
            f"Unable to generate a unique short after {self.max_mint_attempts} attempts"
        )
    
    async def resolve(self, short: str) -> Mapping:
        """Get the mapping for a token.
        
        Args:
            short: The token to lookup
            
        Returns:
            The valid mapping
            
        Raises:
            MappingNotFoundError: If the token is malformed or unknown
            MappingInvalidError: If the mapping exists but is not valid
            StorageUnavailableError: If the store fails
        """
        if not self.generator.is_valid_token(short):
            self.logger.debug(f"Malformed token: {short!r}")
            raise MappingNotFoundError(short)
        
        mapping = await self.store.get(short)
        
        if mapping is None:
            self.logger.warning(f"Short not found: {short}")
            raise MappingNotFoundError(short)
        
        if not mapping.valid:
            self.logger.warning(f"Short is not valid: {short}")
            raise MappingInvalidError(mapping)
        
        self.logger.debug(f"Resolved: {short} -> {mapping.url}")
        return mapping
    
    async def list_all(self) -> List[Mapping]:
        """List every mapping."""
        return await self.store.list_all()
    
    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.
        
        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }
    
    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
