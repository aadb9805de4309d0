from pydantic import BaseModel, ConfigDict


# Ask Schemas
class AskResponse(BaseModel):
    model_config = ConfigDict(frozen=True)
    reply: str
    build: str


# Service Schemas
class HealthResponse(BaseModel):
    status: str = "ok"
    instance: str


class VersionResponse(BaseModel):
    name: str
    build: str
    api: str


def to_json_bytes(model: BaseModel) -> bytes:
    return model.model_dump_json().encode("utf-8")
