"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

APP_TITLE: str = "Auction Cataloguing Assistant"

# Opening window
OPENING_SIZE: tuple[int, int] = (600, 300)

# Sorting view
SORTING_SIZE: tuple[int, int] = (1000, 900)
PREVIEW_FALLBACK_SIZE: tuple[int, int] = (700, 500)  # used before the label is laid out

# Lot view
LOT_SIZE: tuple[int, int] = (1000, 700)
DEFAULT_LOT_THUMB_SIDE: int = 300
DEFAULT_LOT_MAX_IMAGES: int = 3

# Status bar message timeout (ms)
STATUS_TIMEOUT_MS: int = 4000

# Button labels
BTN_PREVIOUS = "Previous"
BTN_NEXT = "Next"
BTN_HIDE = "Hide"
BTN_ASSIGN_NEXT = "Assign to Next Lot"
BTN_ASSIGN_PREVIOUS = "Assign to Previous Lot"
BTN_ASSIGN_MANUAL = "Assign to Manual Lot"
BTN_SWITCH_TO_LOTS = "Switch to Lot UI"
BTN_PREVIOUS_LOT = "Previous Lot"
BTN_NEXT_LOT = "Next Lot"
BTN_GO_TO_LOT = "Go to Lot..."
BTN_BACK_TO_SORTING = "Back to Sorting UI"
BTN_GENERATE_DOC = "Generate Document"
BTN_CANCEL_EXPORT = "Cancel Export"
