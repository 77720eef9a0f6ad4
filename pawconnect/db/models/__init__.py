# pawconnect/db/models/__init__.py

from pawconnect.db.models.user import User
from pawconnect.db.models.pet import Pet
from pawconnect.db.models.post import Post
from pawconnect.db.models.medical_record import MedicalRecord

from pawconnect.db.models.like import Like
from pawconnect.db.models.follow import Follow
from pawconnect.db.models.comment import Comment
from pawconnect.db.models.match import Match
