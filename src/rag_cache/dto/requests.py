"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request DTO for processing a query.

    Empty and whitespace-only queries are accepted; the retriever decides
    what context, if any, they get.
    """

    query: str = Field(..., description="The user question to answer")
