"""Inheritance and gift tax: 10% over 10 triệu, family transfers exempt."""

from datetime import timedelta
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.enums import Relationship
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.inheritance import (
    InheritanceGiftInput,
    InheritanceGiftResult,
    InheritedAssetType,
    TransferKind,
)
from vn_tax_calculator.core.rules.flat_rates import (
    INHERITANCE_DECLARATION_DAYS,
    INHERITANCE_RATE,
    INHERITANCE_THRESHOLD,
)
from vn_tax_calculator.shared.formatters import format_number
from vn_tax_calculator.shared.validators import (
    ZERO,
    coerce_enum,
    effective_rate_percent,
    non_negative,
)

# Điều 4 Khoản 4 Luật Thuế TNCN
EXEMPT_RELATIONSHIPS = frozenset(
    {
        Relationship.SPOUSE,
        Relationship.PARENT_CHILD,
        Relationship.GRANDPARENT_GRANDCHILD,
        Relationship.SIBLING,
    }
)

RELATIONSHIP_LABELS = {
    Relationship.SPOUSE: "vợ/chồng",
    Relationship.PARENT_CHILD: "cha mẹ - con cái",
    Relationship.GRANDPARENT_GRANDCHILD: "ông bà - cháu",
    Relationship.SIBLING: "anh chị em ruột",
    Relationship.OTHER_RELATIVE: "họ hàng khác",
    Relationship.NON_RELATIVE: "người không có quan hệ họ hàng",
}

TRANSFER_LABELS = {
    TransferKind.INHERITANCE: "thừa kế",
    TransferKind.GIFT: "quà tặng",
}

RELATIONSHIP_DOCUMENTS = {
    Relationship.SPOUSE: "Giấy chứng nhận kết hôn",
    Relationship.PARENT_CHILD: "Giấy khai sinh hoặc Quyết định công nhận nuôi con nuôi",
    Relationship.GRANDPARENT_GRANDCHILD: "Giấy khai sinh các thế hệ để chứng minh quan hệ",
    Relationship.SIBLING: "Giấy khai sinh của các bên",
}

ASSET_DOCUMENTS = {
    InheritedAssetType.REAL_ESTATE: [
        "Giấy chứng nhận quyền sử dụng đất/quyền sở hữu nhà",
        "Giấy tờ chứng minh giá trị tài sản",
    ],
    InheritedAssetType.SECURITIES: [
        "Sao kê tài khoản chứng khoán",
        "Xác nhận từ công ty chứng khoán về giá trị",
    ],
    InheritedAssetType.VEHICLES: [
        "Giấy đăng ký xe",
        "Hóa đơn mua hoặc Giấy thẩm định giá",
    ],
    InheritedAssetType.CASH: [
        "Sao kê tài khoản ngân hàng",
        "Giấy xác nhận số dư (nếu tiền gửi)",
    ],
    InheritedAssetType.JEWELRY: [
        "Giấy kiểm định/chứng nhận chất lượng",
        "Hóa đơn mua hoặc Giấy thẩm định giá",
    ],
}


def is_exempt_relationship(relationship: Relationship) -> bool:
    return relationship in EXEMPT_RELATIONSHIPS


def get_required_documents(data: InheritanceGiftInput) -> list[str]:
    """Documents to file with the 04/TNCN declaration."""
    documents = [
        "Tờ khai thuế TNCN (Mẫu 04/TNCN)",
        "CCCD/Hộ chiếu của người nhận",
    ]
    if data.relationship in RELATIONSHIP_DOCUMENTS:
        documents.append(RELATIONSHIP_DOCUMENTS[data.relationship])

    if data.transfer_kind == TransferKind.INHERITANCE:
        documents.extend(
            [
                "Giấy chứng tử của người để lại tài sản",
                "Di chúc hoặc Biên bản họp gia đình chia thừa kế",
                "Văn bản khai nhận/phân chia di sản thừa kế có công chứng",
            ]
        )
    else:
        documents.extend(["Hợp đồng tặng cho có công chứng", "CCCD của người tặng"])

    seen_types = []
    for asset in data.assets:
        if asset.asset_type not in seen_types:
            seen_types.append(asset.asset_type)
            documents.extend(ASSET_DOCUMENTS.get(asset.asset_type, []))
    return documents


def _family_exemption(data: InheritanceGiftInput) -> Optional[str]:
    if not is_exempt_relationship(data.relationship):
        return None
    return (
        "Miễn thuế theo Điều 4 Khoản 4 Luật Thuế TNCN: "
        f"{TRANSFER_LABELS[data.transfer_kind]} giữa {RELATIONSHIP_LABELS[data.relationship]}"
    )


INHERITANCE_GIFT_RULE = FlatRateRule(
    name="inheritance_gift",
    rate=INHERITANCE_RATE,
    threshold_mode=ThresholdMode.EXCESS_OVER,
    threshold=INHERITANCE_THRESHOLD,
    exemption_predicate=_family_exemption,
    below_threshold_reason=(
        f"Miễn thuế theo Điều 23 Luật Thuế TNCN: giá trị không vượt {format_number(INHERITANCE_THRESHOLD)} ₫"
    ),
    legal_note="Thuế TNCN 10% trên phần giá trị vượt 10 triệu đồng mỗi lần nhận.",
)


def calculate_inheritance_gift_tax(data: InheritanceGiftInput) -> InheritanceGiftResult:
    """Compute PIT on an inheritance or gift.

    Family relationships are checked first, so a spouse inheriting any
    amount pays nothing. Otherwise 10% applies to the value above 10 triệu.

    Args:
        data: Kind of transfer, relationship and assets received

    Returns:
        InheritanceGiftResult with the tax line, deadline and documents
    """
    data = data.model_copy(
        update={
            "relationship": coerce_enum(Relationship, data.relationship, Relationship.NON_RELATIVE),
            "transfer_kind": coerce_enum(TransferKind, data.transfer_kind, TransferKind.INHERITANCE),
        }
    )
    total_value = sum((non_negative(a.value, "asset_value") for a in data.assets), ZERO)
    tax = evaluate_rule(INHERITANCE_GIFT_RULE, total_value, data)

    if tax.is_exempt and is_exempt_relationship(data.relationship):
        notes = [
            "Vẫn cần khai thuế dù được miễn (Mẫu 04/TNCN)",
            "Phải có giấy tờ chứng minh quan hệ huyết thống/hôn nhân",
            f"Thời hạn khai thuế: {INHERITANCE_DECLARATION_DAYS} ngày kể từ ngày phát sinh",
        ]
    elif tax.is_exempt:
        notes = [
            "Vẫn nên lưu giữ giấy tờ để chứng minh nếu cần",
            "Nếu nhận nhiều lần và mỗi lần vượt ngưỡng, vẫn phải nộp thuế",
        ]
    else:
        notes = [
            f"Thuế = ({format_number(total_value)} - {format_number(INHERITANCE_THRESHOLD)}) x 10% "
            f"= {format_number(tax.tax_amount)} ₫",
            f"Thời hạn khai thuế: {INHERITANCE_DECLARATION_DAYS} ngày kể từ ngày phát sinh",
            "Thời hạn nộp thuế: 10 ngày kể từ ngày có thông báo thuế",
        ]

    deadline = None
    if data.transaction_date is not None:
        deadline = data.transaction_date + timedelta(days=INHERITANCE_DECLARATION_DAYS)

    return InheritanceGiftResult(
        transfer_kind=data.transfer_kind,
        relationship=data.relationship,
        total_value=total_value,
        tax=tax,
        effective_rate=effective_rate_percent(tax.tax_amount, total_value),
        declaration_deadline=deadline,
        required_documents=get_required_documents(data),
        notes=notes,
    )
