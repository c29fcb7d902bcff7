from __future__ import annotations

import os


# Pin configuration before config.py is imported; .env must not leak into tests.
os.environ["SMHI_BASE_URL"] = "https://smhi.test/api/version/latest"
os.environ["PRINT_DELAY_SECONDS"] = "0"
os.environ["DATE_FORMAT"] = "%Y-%m-%d"
os.environ["DISPLAY_TIMEZONE"] = ""
