from pydantic import BaseModel, field_validator


class SearchRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query cannot be empty")
        return value


class AnswerItem(BaseModel):
    question: str
    answer: str


class SearchResponse(BaseModel):
    direct_answer: str
    people_also_ask: list[AnswerItem]
