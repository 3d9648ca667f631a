from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_NOMINATIONS = 3

TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class ParticipantRecord(BaseSchema):
    """One participant and the peers they nominated.

    Serialized with the ``rollNumber`` / ``choices`` keys of the persisted
    document so stored state stays readable by older clients.
    """

    identifier: str = Field(alias="rollNumber", min_length=1)
    nominations: list[str] = Field(
        default_factory=list, alias="choices", max_length=MAX_NOMINATIONS
    )

    @model_validator(mode="after")
    def nominations_are_distinct_peers(self) -> "ParticipantRecord":
        if self.identifier in self.nominations:
            raise ValueError(f"{self.identifier!r} cannot nominate itself")
        if len(set(self.nominations)) != len(self.nominations):
            raise ValueError(f"{self.identifier!r} has duplicate nominations")
        return self

    def nominates(self, identifier: str) -> bool:
        return identifier in self.nominations


class StoreDocument(BaseSchema):
    users: dict[str, ParticipantRecord] = Field(default_factory=dict)

    @model_validator(mode="after")
    def keys_match_identifiers(self) -> "StoreDocument":
        for key, record in self.users.items():
            if key != record.identifier:
                raise ValueError(
                    f"record stored under {key!r} has identifier {record.identifier!r}"
                )
        return self


class LLMProviderConfig(BaseSchema):
    provider_id: str
    provider_type: str
    base_url: str | None = None
    model_name: str
    api_key: str | None = None
    max_retries: int = 3
    timeout_seconds: int = 30
