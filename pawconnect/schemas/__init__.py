from pawconnect.schemas.user import User, UserCreate, UserPublic, UserUpdate
from pawconnect.schemas.pet import Pet, PetCreate, PetUpdate
from pawconnect.schemas.post import Post, PostCreate, PostUpdate
from pawconnect.schemas.medical_record import MedicalRecord, MedicalRecordCreate, MedicalRecordUpdate
from pawconnect.schemas.social import Comment, CommentCreate, Follow, FollowCreate, Like, LikeCreate
from pawconnect.schemas.match import Match, MatchCreate, SwipeRequest
from pawconnect.schemas.recommendation import RecommendationDocument
