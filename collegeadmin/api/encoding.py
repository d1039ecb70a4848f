# collegeadmin/api/encoding.py
from decimal import Decimal
from typing import Any

from fastapi.encoders import jsonable_encoder


def encode_payload(payload: Any) -> Any:
    """
    JSON-представление для ответов без response_model.

    Decimal (суммы, баллы) отдаём строкой, как это делают pydantic-схемы
    вроде InvoiceOut и ReportStats, а не float.
    """
    return jsonable_encoder(payload, custom_encoder={Decimal: str})
