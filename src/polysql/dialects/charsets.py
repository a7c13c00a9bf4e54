"""
Character sets and their per-backend names.
"""

from __future__ import annotations

from enum import Enum

from ..errors import FeatureNotSupportedError
from .drivers import DriverType


class CharacterSet(Enum):
    """
    Character sets understood by MySQL. Only a subset has a PostgreSQL
    server encoding; SQLite has no explicit character set selection.
    """

    ARMSCII8 = "armscii8"
    ASCII = "ascii"
    BIG5 = "big5"
    BINARY = "binary"
    CP850 = "cp850"
    CP852 = "cp852"
    CP866 = "cp866"
    CP932 = "cp932"
    CP1250 = "cp1250"
    CP1251 = "cp1251"
    CP1256 = "cp1256"
    CP1257 = "cp1257"
    DEC8 = "dec8"
    EUCJPMS = "eucjpms"
    EUCKR = "euckr"
    GB2312 = "gb2312"
    GBK = "gbk"
    GEOSTD8 = "geostd8"
    GREEK = "greek"
    HEBREW = "hebrew"
    HP8 = "hp8"
    KEYBCS2 = "keybcs2"
    KOI8R = "koi8r"
    KOI8U = "koi8u"
    LATIN1 = "latin1"
    LATIN2 = "latin2"
    LATIN5 = "latin5"
    LATIN7 = "latin7"
    MACCE = "macce"
    MACROMAN = "macroman"
    SJIS = "sjis"
    SWE7 = "swe7"
    TIS620 = "tis620"
    UCS2 = "ucs2"
    UJIS = "ujis"
    UTF8MB3 = "utf8mb3"
    UTF8MB4 = "utf8mb4"
    UTF16 = "utf16"
    UTF16LE = "utf16le"
    UTF32 = "utf32"

    @property
    def mysql_name(self) -> str:
        return self.name.lower()

    @property
    def postgres_encoding(self) -> str | None:
        """PostgreSQL server encoding, or ``None`` when there is no equivalent."""
        return _POSTGRES_ENCODINGS.get(self)

    def postgres_encoding_or_raise(self) -> str:
        encoding = self.postgres_encoding
        if encoding is None:
            raise FeatureNotSupportedError(
                DriverType.POSTGRESQL, f"Character set {self.mysql_name}"
            )
        return encoding

    def supported_by(self, driver: DriverType | None) -> bool:
        if driver is None:
            return False
        if driver.is_mysql_family:
            return True
        if driver is DriverType.POSTGRESQL:
            return self.postgres_encoding is not None
        return False


_POSTGRES_ENCODINGS: dict[CharacterSet, str] = {
    CharacterSet.UTF8MB4: "UTF8",
    CharacterSet.UTF8MB3: "UTF8",
    CharacterSet.LATIN1: "LATIN1",
    CharacterSet.LATIN2: "LATIN2",
    CharacterSet.LATIN5: "LATIN5",
    CharacterSet.LATIN7: "ISO_8859_13",
    CharacterSet.KOI8R: "KOI8R",
    CharacterSet.KOI8U: "KOI8U",
    CharacterSet.SJIS: "SJIS",
    CharacterSet.EUCJPMS: "EUC_JP",
    CharacterSet.UJIS: "EUC_JP",
    CharacterSet.EUCKR: "EUC_KR",
    CharacterSet.GB2312: "EUC_CN",
    CharacterSet.GBK: "GBK",
    CharacterSet.BIG5: "BIG5",
    CharacterSet.ASCII: "SQL_ASCII",
    CharacterSet.TIS620: "TIS620",
}
