from .user import User, UserCreate, LoginRequest, RefreshRequest, Token, TokenPayload, LoginResponse, RegisterResponse
from .business_profile import BusinessProfile, BusinessProfileCreate, BusinessProfileUpdate
from . import assessment
