"""LLM service module.

Provides the language model abstraction layer used by question generation
(Groq, Google Gemini, Ollama, NVIDIA).

Key modules:
- llm.py: Provider factory and client creation
- structured_invoker.py: Completion call, output cleanup and strict JSON parse
- llm_schemas.py: Pydantic schemas for Jeopardy question sets
"""
