from pydantic import BaseModel, Field


# --- Matching ---

class MatchRequest(BaseModel):
    title: str | None = None
    language: str | None = None


class MatchResponse(BaseModel):
    keyword: str | None
    external_id: str | None
    confidence: str  # "exact" / "partial" / "semantic" / "none"
    search_terms: list[str] = []

    model_config = {"from_attributes": True}


class SuggestRequest(BaseModel):
    title: str | None = None
    language: str | None = None
    limit: int = Field(default=3, ge=0, le=50)


class SuggestionResponse(BaseModel):
    keyword: str
    external_id: str | None
    relevance: float

    model_config = {"from_attributes": True}


class SuggestListResponse(BaseModel):
    suggestions: list[SuggestionResponse]


# --- Batch analysis ---

class AnalyzeRequest(BaseModel):
    titles: list[str]
    language: str | None = None
    use_ai: bool = True


class TitleMatchResponse(BaseModel):
    title: str
    result: MatchResponse
    suggestions: list[SuggestionResponse] = []

    model_config = {"from_attributes": True}


class MatchStatsResponse(BaseModel):
    total: int
    exact: int
    partial: int
    semantic: int
    none: int
    assignable: int

    model_config = {"from_attributes": True}


class Assignment(BaseModel):
    title: str
    external_id: str


class AnalyzeResponse(BaseModel):
    matches: list[TitleMatchResponse]
    stats: MatchStatsResponse
    assignments: list[Assignment]
    semantic_used: bool = False


# --- Mappings ---

class KeywordListResponse(BaseModel):
    language: str
    keywords: list[str]
    total: int


class CoverageResponse(BaseModel):
    language: str
    total: int
    mapped: int
    unmapped: list[str]


# --- Health ---

class ServiceStatus(BaseModel):
    name: str
    status: str  # "ok" / "degraded" / "unavailable"
    detail: str = ""


class HealthResponse(BaseModel):
    status: str = "ok"  # "ok" / "degraded"
    loaded_languages: list[str] = []
    services: list[ServiceStatus] = []
