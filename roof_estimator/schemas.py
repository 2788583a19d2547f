from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt

class EstimateRequest(BaseModel):
    # Presence and range are checked by the service so each failure gets
    # its own message; pydantic only enforces the JSON types. Strict numbers
    # keep booleans out and let an integer cost echo back as an integer.
    address: str | None = None
    costPerSqFt: StrictInt | StrictFloat | None = None

class Coordinates(BaseModel):
    lat: float
    lng: float

class EstimateResponse(BaseModel):
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "address": "1600 Amphitheatre Pkwy, Mountain View, CA",
            "roofArea": 538,
            "roofAreaMeters": 50.0,
            "roofSegments": [20.0, 30.0],
            "coordinates": {"lat": 34.05, "lng": -118.25},
            "placeId": "ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
            "costPerSqFt": 10,
            "totalCost": "$5,380.00",
            "timestamp": "2026-10-19T12:00:00.000Z",
        }
    })

    address: str
    roofArea: int
    roofAreaMeters: float
    roofSegments: list[float]
    coordinates: Coordinates
    placeId: str
    costPerSqFt: int | float
    totalCost: str
    timestamp: str

class ErrorResponse(BaseModel):
    error: str
