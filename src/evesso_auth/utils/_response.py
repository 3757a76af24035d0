from typing import Self

from lia import Response as DuckResponse
from pydantic import TypeAdapter

from ..models.auth import Failure, NormalizedAuthResult

FailureList = TypeAdapter(list[Failure])


class Response(DuckResponse):
    @classmethod
    def json_body(cls, body: str, status_code: int = 200) -> Self:
        return cls(
            status_code=status_code,
            body=body,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def auth_result(cls, result: NormalizedAuthResult) -> Self:
        return cls.json_body(result.model_dump_json())

    @classmethod
    def failures(cls, failures: list[Failure], status_code: int = 401) -> Self:
        return cls.json_body(
            FailureList.dump_json(failures).decode("utf-8"), status_code=status_code
        )
