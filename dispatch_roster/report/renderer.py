"""
Operations hand-over report rendering.

Builds the fixed bilingual report text from the recipient, the deputy
and the finalized unit list. The recipient is counted among the field
units but never listed as a row.
"""

import logging
from typing import Iterable

from dispatch_roster.roster.models import UnitRecord, UnitStatus

logger = logging.getLogger(__name__)

MISSING_NAMES_MESSAGE = "الرجاء كتابة المستلم والنائب (الاسم + الكود)"

REPORT_TEMPLATE = (
    "\U0001F4CC استلام العمليات \U0001F4CC\n"
    "\n"
    "المستلم : {recipient}\n"
    "\n"
    "النائب : {deputy}\n"
    "\n"
    "عدد و اسماء الوحدات الاسعافيه في الميدان :{{{field_count}}}\n"
    "{field_rows}"
    "\n"
    "خارج الخدمة : ({out_of_service_count})\n"
    "{out_of_service_rows}"
    "\n"
    "\U0001F399\uFE0F تم استلام العمليات و جاهزون للتعامل مع البلاغات\n"
    "\n"
    "الملاحظات : تحديث"
)


class ValidationError(ValueError):
    """Raised when the report cannot be generated from the given input."""


class ReportRenderer:
    """
    Renders the hand-over report.

    Steps:
    1. Take the recipient's name (the part before "|")
    2. Drop blank rows and the recipient's own row
    3. Split into field and out-of-service units
    4. Format each section and fill the template
    """

    def render(
        self,
        recipient: str,
        deputy: str,
        units: Iterable[UnitRecord],
    ) -> str:
        """
        Render the report text.

        Args:
            recipient: "Name | Code" of the person taking over operations.
            deputy: "Name | Code" of the deputy.
            units: Current unit list; read only.

        Returns:
            The final report text.

        Raises:
            ValidationError: If recipient or deputy is empty.
        """
        if not (recipient or "").strip() or not (deputy or "").strip():
            raise ValidationError(MISSING_NAMES_MESSAGE)

        recipient_name = recipient.split("|", 1)[0].strip()

        listed = [
            unit for unit in units
            if not unit.is_blank and unit.name.strip() != recipient_name
        ]
        field = [u for u in listed if u.status != UnitStatus.OUT_OF_SERVICE]
        out_of_service = [u for u in listed if u.status == UnitStatus.OUT_OF_SERVICE]

        logger.info(
            "Rendering report: %d field units, %d out of service",
            len(field),
            len(out_of_service),
        )

        return REPORT_TEMPLATE.format(
            recipient=recipient,
            deputy=deputy,
            # The recipient is counted but not listed
            field_count=len(field) + 1,
            field_rows=self._rows(self.format_field_row(u) for u in field),
            out_of_service_count=len(out_of_service),
            out_of_service_rows=self._rows(
                self.format_out_of_service_row(u) for u in out_of_service
            ),
        )

    @staticmethod
    def format_field_row(unit: UnitRecord) -> str:
        """Format an in-field unit: "name | code (busy) - (location)"."""
        name = unit.name.strip()
        code = unit.code.strip()
        base = " | ".join(part for part in (name, code) if part)

        annotations = []
        if unit.status == UnitStatus.BUSY:
            annotations.append(UnitStatus.BUSY.label)
        if unit.location:
            annotations.append(unit.location)

        if not annotations:
            return base
        suffix = " - ".join(f"({a})" for a in annotations)
        return f"{base} {suffix}" if base else suffix

    @staticmethod
    def format_out_of_service_row(unit: UnitRecord) -> str:
        row = unit.name
        if unit.code:
            row += f" | {unit.code}"
        if unit.location:
            row += f" ({unit.location})"
        return row

    @staticmethod
    def _rows(rows: Iterable[str]) -> str:
        return "".join(f"{row}\n" for row in rows)


def render_report(recipient: str, deputy: str, units: Iterable[UnitRecord]) -> str:
    """Render the hand-over report with a default renderer."""
    return ReportRenderer().render(recipient, deputy, units)
