# Schemas package
from .shared import CamelModel, SuccessResponse
from .auth import RegisterRequest, LoginRequest, UserResponse, AuthResponse, NicknameUpdate, NicknameUpdateResponse, AvatarUpdate, AvatarUpdateResponse, NicknameAvailabilityResponse
from .papers import PaperCreate, PaperResponse, PaperDetailResponse, PaperEnvelope, PaperDetailEnvelope, PaperListEnvelope, CommentCreate, CommentResponse, CommentEnvelope, CommentListEnvelope, LikeResponse, UploadResponse
from .messages import FromUser, RelatedPaper, RelatedComment, MessageResponse, MessageListEnvelope, UnreadCountResponse
