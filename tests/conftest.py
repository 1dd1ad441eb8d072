import os

# Shared calendars and cached formatters read these once, on first use.
os.environ["DATEKIT_TIMEZONE"] = "UTC"
os.environ["DATEKIT_FIRST_WEEKDAY"] = "1"
