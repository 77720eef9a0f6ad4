from pawconnect.storage.base import Storage, StorageError, UniqueViolationError, match_key
from pawconnect.storage.database import DatabaseStorage
from pawconnect.storage.memory import MemStorage
