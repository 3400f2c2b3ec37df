"""Tests for token generation."""

import random
import string

import pytest
from tldr.tokens import TokenGenerator


class TestTokenGenerator:
    """Test token generation."""
    
    def test_generate_default_length(self):
        """Tokens are 18 characters by default."""
        generator = TokenGenerator()
        
        token = generator.generate()
        assert len(token) == 18
        assert generator.is_valid_token(token)
    
    def test_generate_uses_letters_only(self):
        """Every character comes from the 52-letter alphabet, never a digit."""
        generator = TokenGenerator()
        
        assert len(TokenGenerator.ALPHABET) == 52
        for _ in range(200):
            token = generator.generate()
            assert set(token) <= set(string.ascii_letters)
            assert not any(c.isdigit() for c in token)
    
    def test_generate_custom_length(self):
        """Test token with custom length."""
        generator = TokenGenerator(default_length=6)
        
        assert len(generator.generate()) == 6
        assert len(generator.generate(length=10)) == 10
    
    def test_injected_random_source(self):
        """Seeded random sources give reproducible tokens."""
        first = TokenGenerator(rng=random.Random(42))
        second = TokenGenerator(rng=random.Random(42))
        
        assert [first.generate() for _ in range(5)] == [second.generate() for _ in range(5)]
    
    def test_tokens_differ(self):
        """Consecutive tokens are not repeated."""
        generator = TokenGenerator()
        
        tokens = {generator.generate() for _ in range(1000)}
        assert len(tokens) == 1000
    
    def test_is_valid_token(self):
        """Test format validation."""
        generator = TokenGenerator()
        
        assert generator.is_valid_token("abcdefghiJKLMNOPQR")
        
        # Wrong length
        assert not generator.is_valid_token("abcdef")
        assert not generator.is_valid_token("a" * 19)
        assert not generator.is_valid_token("")
        
        # Outside the alphabet
        assert not generator.is_valid_token("abcdefghiJKLMNOPQ1")
        assert not generator.is_valid_token("abcdefghiJKLMNOP-_")
        assert not generator.is_valid_token("abcdefghiJKLMNOPQ ")
        
        assert not generator.is_valid_token(None)
    
    def test_invalid_length(self):
        """A zero length generator is rejected."""
        with pytest.raises(ValueError):
            TokenGenerator(default_length=0)
    
    def test_generate_rejects_non_positive_length(self):
        """Explicit lengths are honored exactly; zero or negative is an error."""
        generator = TokenGenerator()
        
        assert len(generator.generate(length=1)) == 1
        
        with pytest.raises(ValueError):
            generator.generate(length=0)
        
        with pytest.raises(ValueError):
            generator.generate(length=-3)
