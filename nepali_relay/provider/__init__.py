"""
Clients for the upstream services the relay forwards to.

- translate: Google Translate (GTX) romanized -> Nepali
- input_tools: Google Input Tools transliteration candidates
- gemini_sdk: Gemini via the google-genai SDK
- speech: Google Translate speech synthesis
"""
