from __future__ import annotations

# ──────────────────────────────────────────────────────────────────────────────
# Sentinel object signalling a closed target queue
# ──────────────────────────────────────────────────────────────────────────────
STOP_TARGETS: object = object()

# ──────────────────────────────────────────────────────────────────────────────
# Defaults
# ──────────────────────────────────────────────────────────────────────────────
DEFAULT_URI = (
    "https://foipop.novascotia.ca/foia/views/_AttachmentDownload.jsp?attachmentRSN="
)
DEFAULT_START = 0
DEFAULT_END = 7000
DEFAULT_STEP = 1
DEFAULT_WORKERS = 5
DEFAULT_DEST_DIR = "data"
DEFAULT_CHUNK_SIZE = 8192
