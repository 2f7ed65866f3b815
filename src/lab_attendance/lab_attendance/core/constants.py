"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LAB_CAPACITY_MAX = 40
CLASS_CAPACITY_MAX = 90

DEFAULT_API_BASE_URL = "http://localhost:3000/api"
DEFAULT_REQUEST_TIMEOUT = 5
DEFAULT_LOCAL_STORAGE_PATH = "instance/lab_attendance.json"
DEFAULT_NOTIFICATION_BUFFER = 50

DATE_FORMAT = "%Y-%m-%d"

# Header labels used in exported summary sheets.
LAB_SLOT_EXPORT_LABELS = ("9:10-11:10 AM", "12:10-2:10 PM", "2:20-4:20 PM")
CLASS_SLOT_EXPORT_LABELS = (
    "9:10-10:10 AM",
    "10:10-11:10 AM",
    "12:10-1:10 PM",
    "1:10-2:10 PM",
    "2:20-3:20 PM",
    "3:20-4:20 PM",
)

RECORDS_SHEET_NAME = "Attendance Data"
RECORDS_HEADER = ("Date", "Lab/Class Name", "Type", "Slot", "Student Count")

DEFAULT_LABS = ("AIML-324A", "AIML-324D", "AIML-323A", "AIML-323B", "AIML-325M")
DEFAULT_CLASSES = ("AIML-322A", "AIML-322B", "AIML-324B", "AIML-324C")
