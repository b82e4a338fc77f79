# Pick-lists offered to the authoring UI
SUBJECTS = [
    "Mathematics",
    "Science",
    "English",
    "History",
    "Geography",
    "Computer Science",
    "Physics",
    "Chemistry",
    "Biology",
    "Economics",
]

GRADES = [
    "9th Grade",
    "10th Grade",
    "11th Grade",
    "12th Grade",
]

# Owner assigned to content created without createdById: the seeded teacher account
DEFAULT_OWNER_ID = 1
