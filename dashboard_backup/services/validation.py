"""
Structure check of exported dashboard records.

Records built by DashboardRecord always carry every field, so this check
passes for current output. It guards against the export schema drifting
from the fields listed below.
"""

import logging
from typing import Any, Dict, List


logger = logging.getLogger(__name__)

DASHBOARD_FIELDS = ("name", "description", "permissions", "pages")
PAGE_FIELDS = ("name", "guid", "description", "widgets")
WIDGET_FIELDS = ("visualization", "title", "layout", "rawConfiguration", "id", "linkedEntityGuids")


def find_missing_fields(record: Dict[str, Any]) -> List[str]:
    """Return the paths of required fields absent from an exported record."""
    missing_fields = [name for name in DASHBOARD_FIELDS if name not in record]
    
    pages = record.get('pages')
    if isinstance(pages, list):
        for p_index, page in enumerate(pages):
            if not isinstance(page, dict):
                page = {}
            missing_fields.extend(f"pages[{p_index}].{name}" for name in PAGE_FIELDS if name not in page)
            
            widgets = page.get('widgets')
            if isinstance(widgets, list):
                for w_index, widget in enumerate(widgets):
                    if not isinstance(widget, dict):
                        widget = {}
                    missing_fields.extend(
                        f"pages[{p_index}].widgets[{w_index}].{name}"
                        for name in WIDGET_FIELDS if name not in widget
                    )
    
    return missing_fields


def validate_dashboard_structure(record: Dict[str, Any], label: str) -> List[str]:
    """
    Check an exported record for missing fields and log the outcome.
    
    Never raises; the record has already been written when this runs.
    
    Args:
        record: Exported dashboard dictionary
        label: Name used in log lines, usually the output file path
        
    Returns:
        List[str]: Missing field paths, empty when the structure is complete
    """
    missing_fields = find_missing_fields(record)
    
    if not missing_fields:
        logger.info(f"Structure validated for {label}")
    else:
        logger.warning(
            f"Missing fields in {label}: {', '.join(missing_fields)}",
            extra={'context': {'label': label, 'missing_fields': missing_fields}}
        )
    
    return missing_fields
