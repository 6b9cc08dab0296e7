"""galamint - NFT collection, token class and mint relay for GalaChain."""

__version__ = "0.1.0"
