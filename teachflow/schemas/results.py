from teachflow.schemas.base import ApiModel


class InsertResult(ApiModel):
    inserted_id: str


class UpdateResult(ApiModel):
    matched_count: int
    modified_count: int


class DeleteResult(ApiModel):
    deleted_count: int


class MessageResult(ApiModel):
    message: str
    modified_count: int = 0
