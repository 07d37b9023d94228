"""
Permission slip document.

Builds the HTML of the trapping permission agreement a landowner signs.
The HTML is printed to PDF by the headless browser in server/export.py.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-14
"""

from datetime import date
from html import escape
from typing import Any, Dict, List, Optional

from logic.licenses import split_licenses

TITLE = "TRAPPING PERMISSION AGREEMENT"
TITLE_COLOR = "rgb(22, 101, 52)"
BLANK = "---"


def contract_filename(landowner_name: str) -> str:
    """Download name for a landowner's permission slip.

    Only the first space of the name is replaced.

    Args:
        landowner_name: The landowner's name as stored.

    Returns:
        File name ending in .pdf.
    """
    return f"Permission_{landowner_name.replace(' ', '_', 1)}.pdf"


def contract_body(permission: Dict[str, Any], jurisdiction: str, season: str) -> List[str]:
    """Paragraphs of the agreement text.

    Args:
        permission: Land permission dictionary.
        jurisdiction: Province or state whose regulations apply.
        season: Trapping season the permission covers.

    Returns:
        List of paragraphs.
    """
    return [
        f"I, {permission['landowner_name']}, being the owner/occupant of the property located at:",
        permission.get("property_location") or "",
        "Hereby grant permission to the undersigned trapper to access said land for the "
        f"purpose of trapping furbearing animals in accordance with {jurisdiction} Regulations.",
        f"This permission is valid for the {season} Trapping Season.",
    ]


def trapper_rows(profile: Optional[Dict[str, Any]]) -> List[List[str]]:
    profile = profile or {}
    licenses = split_licenses(profile.get("trapping_license"))
    return [
        ["Trapper", profile.get("full_name") or BLANK],
        ["Trapping License(s)", ", ".join(licenses) or BLANK],
        ["Outdoors Card", profile.get("outdoors_card") or BLANK],
    ]


def render_contract_html(
    permission: Dict[str, Any],
    profile: Optional[Dict[str, Any]],
    jurisdiction: str,
    season: str,
    today: Optional[date] = None,
) -> str:
    """Render the permission agreement as a standalone HTML page.

    Args:
        permission: Land permission dictionary.
        profile: The trapper's profile dictionary, or None.
        jurisdiction: Province or state whose regulations apply.
        season: Trapping season the permission covers.
        today: Date printed on the agreement. Defaults to today.

    Returns:
        HTML document string.
    """
    today = today or date.today()

    paragraphs = "\n".join(
        f"    <p>{escape(p)}</p>" for p in contract_body(permission, jurisdiction, season)
    )
    rows = "\n".join(
        f"      <tr><th>{escape(label)}</th><td>{escape(value)}</td></tr>"
        for label, value in trapper_rows(profile)
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{escape(contract_filename(permission['landowner_name']))}</title>
  <style>
    body {{ font-family: Helvetica, Arial, sans-serif; font-size: 12pt; margin: 20mm; }}
    h1 {{ color: {TITLE_COLOR}; font-size: 22pt; text-align: center; }}
    p {{ line-height: 1.6; white-space: pre-wrap; }}
    table {{ border-collapse: collapse; margin: 8mm 0; width: 100%; }}
    th, td {{ border: 1px solid #999; padding: 2mm 3mm; text-align: left; }}
    th {{ background: #f0f0f0; width: 40%; }}
    .signatures {{ display: flex; justify-content: space-between; margin-top: 25mm; }}
    .signature {{ border-top: 1px solid #000; padding-top: 2mm; width: 70mm; }}
  </style>
</head>
<body>
  <h1>{TITLE}</h1>
  <p>Date: {today.isoformat()}</p>
  <section class="body">
{paragraphs}
  </section>
  <table class="trapper">
{rows}
  </table>
  <div class="signatures">
    <div class="signature">Landowner Signature</div>
    <div class="signature">Trapper Signature</div>
  </div>
</body>
</html>
"""
