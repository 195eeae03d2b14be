"""
Services - LLM backends, response parsing, prompts, storage and use cases.
"""
