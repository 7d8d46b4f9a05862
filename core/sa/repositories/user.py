# core/sa/repositories/user.py
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from core.models.book import utcnow
from core.repositories import UserRepositoryBase
from core.sa.models import User

class UserRepository(UserRepositoryBase):
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.
        
        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(self, username: str, password: str) -> User:
        """Create a new user.
        
        Args:
            username: The login name of the user
            password: The user's password
            
        Returns:
            The created User object
            
        Raises:
            ValueError: If a user with the given username already exists
        """
        # Check if user already exists
        existing = self.get_by_username(username)
        if existing:
            raise ValueError(f"User with username '{username}' already exists")

        now = utcnow()
        user = User(username=username, password=password, created_at=now, updated_at=now)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with username '{username}' already exists")

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by their ID.
        
        Args:
            user_id: The ID of the user to retrieve
            
        Returns:
            The User object if found, None otherwise
        """
        return self.session.query(User).filter(User.id == user_id).one_or_none()

    def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by their username"""
        return self.session.query(User).filter(User.username == username).one_or_none()
