"""Services built on the symbol catalog and the LLM provider."""
