from typing import Union

from pydantic import BaseModel


class AnswerIn(BaseModel):
    questionId: int
    # ratings arrive as numbers, choices and free text as strings
    value: Union[str, int, float, bool]


class ResponseSubmit(BaseModel):
    answers: list[AnswerIn] = []
