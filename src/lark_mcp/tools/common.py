"""Parameter types shared across tool modules."""

from typing import Annotated, Any, Literal

from pydantic import Field

PageToken = Annotated[str | None, Field(description="Pagination token")]

UserIdType = Literal["open_id", "union_id", "user_id"]

DepartmentIdType = Annotated[
    Literal["department_id", "open_department_id"],
    Field(description="Department ID type"),
]

DriveFileType = Literal[
    "doc", "docx", "sheet", "bitable", "folder", "file", "mindnote", "slides"
]

ApprovalLocale = Annotated[
    Literal["zh-CN", "en-US", "ja-JP"], Field(description="Response language")
]


def PageSize(maximum: int, description: str = "Page size") -> Any:
    """Annotated int bounded by the endpoint's maximum page size."""
    return Annotated[int, Field(ge=1, le=maximum, description=f"{description}, max {maximum}")]
