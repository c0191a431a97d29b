"""GPT Action Builder service."""
