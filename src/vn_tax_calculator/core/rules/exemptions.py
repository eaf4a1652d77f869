"""Exempt income categories under Điều 4 Luật Thuế TNCN.

The 2007 law lists 16 categories; the 2025 amendment adds five more
effective from 01/01/2026.
"""

from datetime import date

from vn_tax_calculator.core.models.exemption import ExemptionCategory, ExemptionRule

LAW_2007_EFFECTIVE = date(2007, 1, 1)
AMENDMENT_2025_EFFECTIVE = date(2026, 1, 1)


def _rule(category, name, description, conditions, documents, clause, effective=LAW_2007_EFFECTIVE):
    reference = f"Điều 4, Khoản {clause} Luật Thuế TNCN"
    if effective == AMENDMENT_2025_EFFECTIVE:
        reference += " sửa đổi 2025"
    return ExemptionRule(
        category=category,
        name=name,
        description=description,
        conditions=tuple(conditions),
        required_documents=tuple(documents),
        effective_from=effective,
        legal_reference=reference,
    )


EXEMPTION_RULES: dict[ExemptionCategory, ExemptionRule] = {
    rule.category: rule
    for rule in (
        _rule(
            ExemptionCategory.REAL_ESTATE_ONLY_HOME,
            "Chuyển nhượng nhà ở duy nhất",
            "Thu nhập từ chuyển nhượng nhà ở, quyền sử dụng đất ở duy nhất của cá nhân",
            [
                "Là nhà ở, đất ở duy nhất thuộc sở hữu của người chuyển nhượng",
                "Thời gian sở hữu từ 5 năm trở lên",
                "Diện tích trong hạn mức được công nhận",
            ],
            [
                "Giấy chứng nhận quyền sử dụng đất/nhà ở",
                "Xác nhận không có BĐS khác",
                "Hợp đồng chuyển nhượng",
            ],
            1,
        ),
        _rule(
            ExemptionCategory.FAMILY_TRANSFER,
            "Chuyển nhượng trong gia đình",
            "Thu nhập từ chuyển nhượng BĐS giữa vợ chồng, cha mẹ con, anh chị em ruột",
            [
                "Chuyển nhượng giữa vợ và chồng",
                "Hoặc giữa cha mẹ đẻ và con đẻ/con nuôi hợp pháp",
                "Hoặc giữa anh chị em ruột",
            ],
            [
                "Giấy tờ chứng minh quan hệ gia đình",
                "Hợp đồng chuyển nhượng/tặng cho",
                "Giấy chứng nhận BĐS",
            ],
            2,
        ),
        _rule(
            ExemptionCategory.INHERITANCE_FAMILY,
            "Thừa kế từ gia đình",
            "Thu nhập từ thừa kế BĐS giữa vợ chồng, cha mẹ con, anh chị em ruột",
            ["Thừa kế từ vợ/chồng", "Hoặc từ cha mẹ đẻ/con đẻ", "Hoặc từ anh chị em ruột"],
            [
                "Giấy khai sinh/kết hôn chứng minh quan hệ",
                "Văn bản thừa kế hợp pháp",
                "Giấy chứng tử",
            ],
            3,
        ),
        _rule(
            ExemptionCategory.GIFT_FAMILY,
            "Tặng cho từ gia đình",
            "Thu nhập từ quà tặng BĐS/tài sản giữa vợ chồng, cha mẹ con, anh chị em ruột, ông bà cháu",
            [
                "Tặng cho giữa vợ và chồng",
                "Hoặc giữa cha mẹ và con",
                "Hoặc giữa anh chị em ruột",
                "Hoặc giữa ông bà và cháu",
            ],
            ["Giấy tờ chứng minh quan hệ gia đình", "Hợp đồng tặng cho có công chứng"],
            4,
        ),
        _rule(
            ExemptionCategory.AGRICULTURAL_INCOME,
            "Thu nhập từ nông nghiệp",
            "Thu nhập từ trồng trọt, chăn nuôi, nuôi trồng thủy sản, làm muối của hộ gia đình, cá nhân",
            [
                "Trực tiếp sản xuất nông nghiệp",
                "Thu nhập từ trồng trọt, chăn nuôi, thủy sản, làm muối",
                "Không bao gồm chế biến công nghiệp",
            ],
            [
                "Xác nhận của UBND xã về hoạt động sản xuất",
                "Giấy tờ liên quan đến đất nông nghiệp",
            ],
            5,
        ),
        _rule(
            ExemptionCategory.INTEREST_DEPOSITS,
            "Lãi tiền gửi ngân hàng",
            "Lãi tiền gửi tại ngân hàng, tổ chức tín dụng, KBNN",
            [
                "Tiền gửi tại ngân hàng thương mại",
                "Hoặc tổ chức tín dụng hợp pháp",
                "Hoặc Kho bạc Nhà nước",
            ],
            ["Sổ tiết kiệm hoặc xác nhận của ngân hàng"],
            6,
        ),
        _rule(
            ExemptionCategory.LIFE_INSURANCE,
            "Bảo hiểm nhân thọ",
            "Tiền bảo hiểm nhân thọ, bảo hiểm không bắt buộc",
            [
                "Tiền chi trả bảo hiểm nhân thọ",
                "Bảo hiểm phi nhân thọ",
                "Tiền đáo hạn hợp đồng bảo hiểm",
            ],
            ["Hợp đồng bảo hiểm", "Chứng từ chi trả của công ty bảo hiểm"],
            7,
        ),
        _rule(
            ExemptionCategory.PENSION,
            "Lương hưu BHXH",
            "Lương hưu từ quỹ BHXH",
            [
                "Lương hưu từ quỹ BHXH bắt buộc",
                "Trợ cấp thất nghiệp",
                "Các khoản trợ cấp BHXH khác",
            ],
            ["Quyết định hưởng lương hưu", "Sổ BHXH"],
            8,
        ),
        _rule(
            ExemptionCategory.SCHOLARSHIP,
            "Học bổng",
            "Học bổng từ ngân sách, tổ chức trong và ngoài nước",
            [
                "Học bổng từ ngân sách nhà nước",
                "Hoặc từ tổ chức trong nước hợp pháp",
                "Hoặc từ tổ chức nước ngoài",
            ],
            ["Quyết định cấp học bổng", "Chứng từ nhận học bổng"],
            9,
        ),
        _rule(
            ExemptionCategory.COMPENSATION,
            "Bồi thường bảo hiểm",
            "Tiền bồi thường bảo hiểm, bồi thường tai nạn lao động",
            [
                "Bồi thường từ hợp đồng bảo hiểm",
                "Bồi thường tai nạn lao động, bệnh nghề nghiệp",
                "Bồi thường nhà nước",
            ],
            ["Quyết định bồi thường", "Hồ sơ tai nạn/bệnh nghề nghiệp"],
            10,
        ),
        _rule(
            ExemptionCategory.CHARITY,
            "Thu nhập từ quỹ từ thiện",
            "Thu nhập từ quỹ từ thiện, quỹ nhân đạo",
            [
                "Nhận từ quỹ từ thiện được cấp phép",
                "Hoặc quỹ nhân đạo",
                "Hoặc quỹ khuyến học",
            ],
            ["Xác nhận của quỹ", "Chứng từ nhận tiền"],
            11,
        ),
        _rule(
            ExemptionCategory.FOREIGN_DIPLOMATIC,
            "Thu nhập của nhà ngoại giao",
            "Thu nhập của cá nhân là nhà ngoại giao, viên chức lãnh sự",
            [
                "Là nhà ngoại giao, viên chức lãnh sự",
                "Nhân viên hành chính kỹ thuật của cơ quan đại diện ngoại giao",
                "Theo quy định của pháp luật về ngoại giao",
            ],
            ["Thẻ ngoại giao", "Xác nhận của Bộ Ngoại giao"],
            12,
        ),
        _rule(
            ExemptionCategory.INTERNATIONAL_TREATY,
            "Thu nhập theo điều ước quốc tế",
            "Thu nhập được miễn thuế theo điều ước quốc tế",
            [
                "Theo điều ước quốc tế mà Việt Nam là thành viên",
                "Theo thỏa thuận giữa Chính phủ VN với tổ chức quốc tế",
            ],
            ["Xác nhận của cơ quan có thẩm quyền"],
            13,
        ),
        _rule(
            ExemptionCategory.SEVERANCE_PAY,
            "Trợ cấp thôi việc",
            "Trợ cấp thôi việc, mất việc làm theo quy định",
            [
                "Trợ cấp thôi việc theo Bộ luật Lao động",
                "Trợ cấp mất việc làm",
                "Theo đúng quy định pháp luật",
            ],
            ["Quyết định chấm dứt HĐLĐ", "Chứng từ chi trả trợ cấp"],
            14,
        ),
        _rule(
            ExemptionCategory.NIGHT_SHIFT_ALLOWANCE,
            "Phụ cấp ca đêm",
            "Phụ cấp làm việc ban đêm, làm thêm giờ theo quy định",
            [
                "Phụ cấp làm đêm (22h-6h) theo đúng mức quy định",
                "Phụ cấp làm thêm giờ theo đúng mức quy định",
                "Không vượt mức tối đa cho phép",
            ],
            ["Bảng chấm công", "Chứng từ chi trả phụ cấp"],
            15,
        ),
        _rule(
            ExemptionCategory.HAZARD_ALLOWANCE,
            "Phụ cấp độc hại, nguy hiểm",
            "Phụ cấp độc hại, nguy hiểm theo quy định",
            [
                "Làm việc trong môi trường độc hại",
                "Công việc nguy hiểm theo danh mục",
                "Phụ cấp theo đúng mức quy định",
            ],
            ["Xác nhận của cơ quan về môi trường làm việc"],
            16,
        ),
        _rule(
            ExemptionCategory.HIGH_TECH_INCOME,
            "Thu nhập từ công nghệ cao",
            "Thu nhập từ hoạt động nghiên cứu, phát triển công nghệ cao được ưu đãi",
            [
                "Hoạt động R&D trong lĩnh vực công nghệ cao",
                "Doanh nghiệp được công nhận công nghệ cao",
                "Sản phẩm thuộc danh mục công nghệ cao ưu tiên",
            ],
            ["Giấy chứng nhận doanh nghiệp công nghệ cao", "Xác nhận sản phẩm công nghệ cao"],
            17,
            AMENDMENT_2025_EFFECTIVE,
        ),
        _rule(
            ExemptionCategory.CARBON_CREDITS,
            "Tín dụng carbon",
            "Thu nhập từ chuyển nhượng tín dụng carbon, chứng chỉ giảm phát thải",
            [
                "Thu nhập từ bán tín dụng carbon",
                "Chứng chỉ giảm phát thải được công nhận",
                "Theo cơ chế phát triển sạch (CDM) hoặc tương đương",
            ],
            [
                "Chứng nhận tín dụng carbon",
                "Hợp đồng chuyển nhượng",
                "Xác nhận của cơ quan môi trường",
            ],
            18,
            AMENDMENT_2025_EFFECTIVE,
        ),
        _rule(
            ExemptionCategory.STARTUP_INVESTMENT,
            "Đầu tư khởi nghiệp sáng tạo",
            "Thu nhập từ đầu tư vào doanh nghiệp khởi nghiệp sáng tạo",
            [
                "Đầu tư vào DN khởi nghiệp sáng tạo được công nhận",
                "Thời gian đầu tư tối thiểu 3 năm",
                "DN thuộc lĩnh vực ưu tiên phát triển",
            ],
            [
                "Giấy chứng nhận DN khởi nghiệp sáng tạo",
                "Hợp đồng góp vốn",
                "Xác nhận thời gian đầu tư",
            ],
            19,
            AMENDMENT_2025_EFFECTIVE,
        ),
        _rule(
            ExemptionCategory.DIGITAL_TRANSFORMATION,
            "Chuyển đổi số",
            "Thu nhập từ hoạt động chuyển đổi số, ứng dụng công nghệ số",
            [
                "Thu nhập từ phát triển sản phẩm số",
                "Dịch vụ chuyển đổi số cho DN/tổ chức",
                "Ứng dụng công nghệ AI, blockchain, IoT",
            ],
            ["Xác nhận hoạt động chuyển đổi số", "Hợp đồng cung cấp dịch vụ số"],
            20,
            AMENDMENT_2025_EFFECTIVE,
        ),
        _rule(
            ExemptionCategory.GREEN_BOND_INTEREST,
            "Lãi trái phiếu xanh",
            "Lãi từ trái phiếu xanh, trái phiếu bền vững",
            [
                "Trái phiếu được phát hành để tài trợ dự án xanh",
                "Được cơ quan có thẩm quyền chứng nhận",
                "Theo tiêu chuẩn trái phiếu xanh quốc tế",
            ],
            ["Chứng nhận trái phiếu xanh", "Chứng từ lãi trái phiếu"],
            21,
            AMENDMENT_2025_EFFECTIVE,
        ),
    )
}
