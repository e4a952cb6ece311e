# src/libroteca/models/review.py
from sqlalchemy import (Column, Integer, String, Text, ForeignKey, DateTime,
                      func, CheckConstraint)
from sqlalchemy.orm import relationship
from libroteca.db.session import Base

class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)

    user = relationship("User", back_populates="reviews")
    book = relationship("Book", back_populates="reviews")
    likes = relationship(
        "ReviewLike",
        back_populates="review",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        # Ensure rating is between 1 and 5
        CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_check'),
        # A user may review the same book more than once, so no (user_id, book_id) constraint
    )

    def __repr__(self):
        return f"<Review(id={self.id}, book_id={self.book_id}, user_id='{self.user_id}', rating={self.rating})>"
