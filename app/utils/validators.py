# app/utils/validators.py
# 必填欄位檢查：以 (欄位, 判斷式, 訊息) 的宣告式列表描述，
# 一次回傳所有不通過的欄位，而不是遇到第一個錯誤就停止
from typing import Any, Callable, Dict, List, NamedTuple, Sequence
from fastapi import HTTPException, status
from pydantic import BaseModel


class FieldCheck(NamedTuple):
    field: str
    predicate: Callable[[Any], bool]
    message: str


def not_empty(value: Any) -> bool:
    """None、空字串、只有空白的字串、空列表都視為「空」"""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def has_items(value: Any) -> bool:
    """逗號分隔字串中至少有一個非空白項目"""
    if not isinstance(value, str):
        return False
    return any(part.strip() for part in value.split(","))


PROFILE_CHECKS: Sequence[FieldCheck] = (
    FieldCheck("status", not_empty, "Status is required"),
    FieldCheck("skills", has_items, "Skills is required"),
)

EXPERIENCE_CHECKS: Sequence[FieldCheck] = (
    FieldCheck("title", not_empty, "Title is required"),
    FieldCheck("company", not_empty, "Company is required"),
    FieldCheck("from", not_empty, "From date is required"),
)

EDUCATION_CHECKS: Sequence[FieldCheck] = (
    FieldCheck("school", not_empty, "School is required"),
    FieldCheck("degree", not_empty, "Degree is required"),
    FieldCheck("fieldofstudy", not_empty, "Field of study is required"),
    FieldCheck("from", not_empty, "From date is required"),
)


def run_checks(body: Dict[str, Any], checks: Sequence[FieldCheck]) -> List[Dict[str, Any]]:
    errors = []
    for check in checks:
        value = body.get(check.field)
        if not check.predicate(value):
            errors.append({
                "value": value,
                "msg": check.message,
                "param": check.field,
                "location": "body",
            })
    return errors


def ensure_valid(payload: BaseModel, checks: Sequence[FieldCheck]) -> None:
    """
    在任何資料庫存取之前執行；有錯誤時直接以 400 回應
    """
    errors = run_checks(payload.model_dump(mode="json", by_alias=True), checks)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": errors},
        )
