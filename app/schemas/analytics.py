from pydantic import BaseModel


class ResponseCountsOut(BaseModel):
    dates: list[str]
    counts: list[int]


class BucketOut(BaseModel):
    label: str
    count: int


class DemographicsOut(BaseModel):
    age: list[BucketOut]
    gender: list[BucketOut]
    location: list[BucketOut]
