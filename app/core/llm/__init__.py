"""LLM integration layer.

Small and stateless:
- No prompt/output logging.
- Configured via environment variables (see `app.core.settings`).
- One HTTP request per call; callers decide how failures map to responses.
"""
