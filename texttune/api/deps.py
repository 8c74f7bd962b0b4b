from fastapi import Request

from texttune.services.gemini import GeminiClient


def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini_client
