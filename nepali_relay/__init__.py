"""
Nepali Lipi Relay package.

This package contains:
- settings: configuration and upstream header building
- logging_config: shared logging setup
- errors: error payloads and the global exception handler
- deps: FastAPI dependencies (shared HTTP client)
- romanization: chat-spelling clean-up before dispatch
- upstream: upstream HTTP helpers (JSON fetch, audio streaming)
- provider: clients for translate, input tools, Gemini and speech
- routes / relay_routes: FastAPI app factory and HTTP endpoints
"""
