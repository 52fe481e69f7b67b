from pydantic import BaseModel


class StatsOut(BaseModel):
    products: int
    categories: int
    reviews: int


class HealthOut(BaseModel):
    status: str
    database: str
    server_time: str
    environment: str
