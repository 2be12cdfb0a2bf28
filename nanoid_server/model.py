import time

from pydantic import BaseModel, Field, field_validator

from nanoid_server.config import Strategy
from nanoid_server.utils import gen_id

# Name reported for alphabets passed inline by the client.
CUSTOM_ALPHABET_NAME = "custom"


def generate_response_id():
    return gen_id("nanoids")


def generate_timestamp():
    return int(time.time())


class NanoidRequest(BaseModel):
    size: int | None = Field(
        None, gt=0, description="Id length, defaults to the server setting."
    )
    count: int = Field(1, gt=0, description="Number of ids to generate.")
    alphabet: str | None = Field(
        None, description="Name of a predefined alphabet, see /api/v1/alphabets."
    )
    custom_alphabet: str | None = Field(
        None, description="ASCII symbols to draw from, overrides `alphabet`."
    )
    strategy: Strategy | None = Field(
        None, description="Random draw strategy, defaults to the server setting."
    )

    @field_validator("custom_alphabet")
    @classmethod
    def check_ascii(cls, value: str | None) -> str | None:
        if value is not None and not value.isascii():
            raise ValueError("custom_alphabet must only contain ASCII characters")
        return value


class NanoidResponse(BaseModel):
    id: str = Field(default_factory=generate_response_id)
    object: str = "list"
    created: int = Field(default_factory=generate_timestamp)
    alphabet: str
    alphabet_length: int
    size: int
    strategy: Strategy
    data: list[str]


class AlphabetInfo(BaseModel):
    name: str
    alphabet: str
    length: int
    mask: int


class AlphabetListResponse(BaseModel):
    object: str = "list"
    data: list[AlphabetInfo]
