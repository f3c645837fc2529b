# Schemas package
from .shared import CamelModel, MessageResponse, ReplyCreate, ReplyResponse
from .posts import PostCreate, PostUpdate, PostResponse
from .events import EventCreate, EventUpdate, EventResponse
from .groups import GroupCreate, GroupUpdate, GroupResponse
