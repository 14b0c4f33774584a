from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class EpisodeIdentifier(BaseModel):
    title_slug: str
    season: int = Field(gt=0)
    episode: int = Field(gt=0)

    @property
    def composite(self) -> str:
        return f"{self.title_slug}-{self.season}x{self.episode}"


class ServerEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int = Field(alias="server", ge=0)
    name: str = ""
    url: str = Field(min_length=1)

    @model_validator(mode="after")
    def _default_name(self) -> "ServerEntry":
        if not self.name.strip():
            self.name = f"Server {self.index}"
        else:
            self.name = self.name.strip()
        return self


class ExternalMatch(BaseModel):
    external_id: str
    numeric_id: Optional[str] = None
    title: str = ""

    @field_validator("numeric_id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class ExternalApiMapping(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    anime_id: Optional[str] = None
    data_id: Optional[str] = None
    title: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    constructed_id: Optional[str] = None


class ExtractionResult(BaseModel):
    id: str = ""
    servers: List[ServerEntry] = Field(default_factory=list)


class MappingEnvelope(ExtractionResult):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    external_api_mapping: Optional[ExternalApiMapping] = None

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
