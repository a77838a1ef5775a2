# Create the MongoDB indexes the leave service relies on (restore by createdAt, duplicate leave guard)
# Usage: set env MONGODB_URI and MONGODB_DB_NAME, then run from a machine with access to the database
# Example: python scripts/init_mongo_indexes.py

import os
from pymongo import ASCENDING, DESCENDING, MongoClient

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://mongodb:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "lms")

client = MongoClient(MONGODB_URI)
db = client[MONGODB_DB_NAME]

leaves = db[os.getenv("LEAVES_COLLECTION", "leaves")]
logs = db[os.getenv("AUTOMATION_LOGS_COLLECTION", "automation_logs")]

leaves.create_index([("createdAt", DESCENDING)], name="createdAt_desc")
leaves.create_index(
    [("employeeId", ASCENDING), ("startDate", ASCENDING), ("endDate", ASCENDING)],
    name="employee_period_unique",
    unique=True,
)
logs.create_index([("createdAt", DESCENDING)], name="createdAt_desc")

print(f"Indexes ensured on {MONGODB_DB_NAME}.{leaves.name} and {MONGODB_DB_NAME}.{logs.name}")
