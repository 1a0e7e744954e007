from pydantic import BaseModel


# {"message": "..."} returned by deletes
class StatusMessage(BaseModel):
    message: str
