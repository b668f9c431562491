"""Document type enum."""

from enum import StrEnum


class DocumentType(StrEnum):
    """Legal property document types accepted for verification."""

    SHM = "SHM"
    SHGB = "SHGB"
    AJB = "AJB"
    IMB = "IMB"
    PBB = "PBB"
    GIRIK = "GIRIK"

    @property
    def display_name(self) -> str:
        """
        Get the human readable document name.

        Returns:
            str: Display name for selection lists.
        """
        return DOCUMENT_TYPE_NAMES[self]


DOCUMENT_TYPE_NAMES: dict[DocumentType, str] = {
    DocumentType.SHM: "SHM (Sertifikat Hak Milik)",
    DocumentType.SHGB: "SHGB (Sertifikat Hak Guna Bangunan)",
    DocumentType.AJB: "AJB (Akta Jual Beli)",
    DocumentType.IMB: "IMB (Izin Mendirikan Bangunan)",
    DocumentType.PBB: "PBB (Pajak Bumi dan Bangunan)",
    DocumentType.GIRIK: "Girik / Letter C",
}
