"""Double taxation agreements (Hiệp định tránh đánh thuế hai lần) signed by Vietnam.

Keyed by ISO 3166-1 alpha-2 code; the value is the display name and the
year the agreement was signed.
"""

# Physical presence making an individual tax resident (Điều 2 Luật Thuế TNCN)
RESIDENCY_DAYS_THRESHOLD = 183

DOUBLE_TAX_TREATIES: dict[str, tuple[str, int]] = {
    "AU": ("Úc (Australia)", 1992),
    "AT": ("Áo (Austria)", 2009),
    "BY": ("Belarus", 1997),
    "BE": ("Bỉ (Belgium)", 1996),
    "BN": ("Brunei", 2007),
    "BG": ("Bulgaria", 1996),
    "CA": ("Canada", 1997),
    "CN": ("Trung Quốc (China)", 1995),
    "HR": ("Croatia", 2016),
    "CZ": ("Séc (Czech Republic)", 1997),
    "DK": ("Đan Mạch (Denmark)", 1995),
    "EG": ("Ai Cập (Egypt)", 2012),
    "FI": ("Phần Lan (Finland)", 2002),
    "FR": ("Pháp (France)", 1993),
    "DE": ("Đức (Germany)", 1996),
    "HK": ("Hồng Kông (Hong Kong)", 2008),
    "HU": ("Hungary", 1995),
    "IS": ("Iceland", 2003),
    "IN": ("Ấn Độ (India)", 1994),
    "ID": ("Indonesia", 1998),
    "IR": ("Iran", 2014),
    "IE": ("Ireland", 2008),
    "IL": ("Israel", 2009),
    "IT": ("Ý (Italy)", 1996),
    "JP": ("Nhật Bản (Japan)", 1995),
    "KZ": ("Kazakhstan", 2015),
    "KP": ("Triều Tiên (North Korea)", 2005),
    "KR": ("Hàn Quốc (South Korea)", 1994),
    "KW": ("Kuwait", 2011),
    "LA": ("Lào (Laos)", 1996),
    "LV": ("Latvia", 2016),
    "LU": ("Luxembourg", 1996),
    "MY": ("Malaysia", 1995),
    "MT": ("Malta", 2017),
    "MN": ("Mông Cổ (Mongolia)", 1996),
    "MA": ("Morocco", 2012),
    "MZ": ("Mozambique", 2016),
    "MM": ("Myanmar", 2011),
    "NL": ("Hà Lan (Netherlands)", 1995),
    "NZ": ("New Zealand", 2013),
    "NO": ("Na Uy (Norway)", 1996),
    "OM": ("Oman", 2010),
    "PK": ("Pakistan", 2005),
    "PA": ("Panama", 2017),
    "PH": ("Philippines", 2003),
    "PL": ("Ba Lan (Poland)", 1994),
    "PT": ("Bồ Đào Nha (Portugal)", 2016),
    "QA": ("Qatar", 2009),
    "RO": ("Romania", 1996),
    "RU": ("Nga (Russia)", 1993),
    "SA": ("Ả Rập Saudi (Saudi Arabia)", 2010),
    "RS": ("Serbia", 2016),
    "SC": ("Seychelles", 2006),
    "SG": ("Singapore", 1994),
    "SK": ("Slovakia", 2009),
    "ES": ("Tây Ban Nha (Spain)", 2006),
    "LK": ("Sri Lanka", 2006),
    "SE": ("Thụy Điển (Sweden)", 1994),
    "CH": ("Thụy Sĩ (Switzerland)", 1996),
    "TW": ("Đài Loan (Taiwan)", 1998),
    "TH": ("Thái Lan (Thailand)", 1992),
    "TN": ("Tunisia", 2013),
    "TR": ("Thổ Nhĩ Kỳ (Turkey)", 2015),
    "UA": ("Ukraine", 1996),
    "AE": ("UAE", 2009),
    "GB": ("Anh (United Kingdom)", 1994),
    "US": ("Hoa Kỳ (United States)", 2016),
    "UZ": ("Uzbekistan", 1996),
    "VE": ("Venezuela", 2009),
}
