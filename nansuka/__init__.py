"""
Nansuka - bilingual paragraph translation assistant.

Splits input into paragraphs, translates only the ones that changed,
threads a short context summary into every batch, and caches results
locally. An edge proxy forwards requests to the LLM provider so the API
key never reaches the client.
"""

__version__ = "0.1.0"
