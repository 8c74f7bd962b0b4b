from pydantic import BaseModel, ConfigDict, Field


class _TransformRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    word_limit: int | None = Field(default=None, alias="wordLimit")
    min_word_limit: int | None = Field(default=None, alias="minWordLimit")
    tone: str | None = None


class RewriteRequest(_TransformRequest):
    text: str | None = None


class GenerateRequest(_TransformRequest):
    prompt: str | None = None


class RewriteResponse(BaseModel):
    rewrittenText: str


class GenerateResponse(BaseModel):
    generatedText: str
