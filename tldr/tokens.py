"""Token generation for short URLs."""

import random
import string
from typing import Optional


class TokenGenerator:
    """Generate random fixed-length tokens."""
    
    # Upper and lower case Latin letters, no digits
    ALPHABET = string.ascii_letters
    DEFAULT_LENGTH = 18
    
    def __init__(self, default_length: int = DEFAULT_LENGTH, rng: Optional[random.Random] = None):
        """Initialize token generator.
        
        Args:
            default_length: Length of generated tokens
            rng: Random source (a fresh, time-seeded one if not specified)
        """
        if default_length < 1:
            raise ValueError("Token length must be at least 1")
        
        self.default_length = default_length
        self.rng = rng or random.Random()
    
    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random token.
        
        Args:
            length: Length of the token (uses default if not specified)
            
        Returns:
            Token made of characters drawn uniformly from ALPHABET

        Raises:
            ValueError: If length is less than 1
        """
        if length is None:
            length = self.default_length
        if length < 1:
            raise ValueError("Token length must be at least 1")
        return ''.join(self.rng.choices(self.ALPHABET, k=length))
    
    def is_valid_token(self, token: str) -> bool:
        """Check that a token has the generator's length and alphabet.
        
        Args:
            token: Token to check
            
        Returns:
            True if the token could have been produced by this generator
        """
        if not isinstance(token, str) or len(token) != self.default_length:
            return False
        return all(c in self.ALPHABET for c in token)
