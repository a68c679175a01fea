"""
Database Schemas for the Portfolio CMS

Each Pydantic model = one MongoDB collection (lowercased class name).
The *Update models carry the same fields, all optional, for partial updates.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional

Role = Literal["admin", "employee"]
ProjectType = Literal["image", "video"]
ResumeType = Literal["experience", "education"]

# Auth
class User(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = "employee"
    is_active: bool = True

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None
    is_active: Optional[bool] = None

class LoginRequest(BaseModel):
    email: str
    password: str

# Content
class Service(BaseModel):
    title: str
    description: str
    price: float = Field(0, ge=0)
    features: List[str] = []
    icon: Optional[str] = None  # icon key used by the site

class ServiceUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    features: Optional[List[str]] = None
    icon: Optional[str] = None

class Project(BaseModel):
    title: str
    description: str
    image: Optional[str] = None  # image or video url
    link: Optional[str] = None
    category: Optional[str] = None  # Category id, not enforced
    likes: int = Field(0, ge=0)
    technologies: List[str] = []
    gallery: List[str] = []  # urls
    project_type: ProjectType = "image"

class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None
    category: Optional[str] = None
    likes: Optional[int] = Field(None, ge=0)
    technologies: Optional[List[str]] = None
    gallery: Optional[List[str]] = None
    project_type: Optional[ProjectType] = None

class Category(BaseModel):
    name: str
    color: str = "#3b82f6"
    description: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None

class Testimonial(BaseModel):
    name: str
    position: Optional[str] = None
    company: Optional[str] = None
    message: str
    image: Optional[str] = None
    rating: int = Field(5, ge=1, le=5)

class TestimonialUpdate(BaseModel):
    name: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)

class Resume(BaseModel):
    title: str
    organization: str
    duration: str  # free text, e.g. "2021 - Present"
    description: Optional[str] = None
    type: ResumeType
    order: int = 0

class ResumeUpdate(BaseModel):
    title: Optional[str] = None
    organization: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    type: Optional[ResumeType] = None
    order: Optional[int] = None

# Inbox
class Message(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    subject: str
    message: str

class MessageUpdate(BaseModel):
    is_read: Optional[bool] = None

# Singleton
class Settings(BaseModel):
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    notification_email: Optional[EmailStr] = None
