# src/libroteca/models/review_like.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func, UniqueConstraint
from sqlalchemy.orm import relationship
from libroteca.db.session import Base

class ReviewLike(Base):
    """A user's endorsement of a review. The row existing is the like."""
    __tablename__ = "review_likes"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="review_likes")
    review = relationship("Review", back_populates="likes")

    __table_args__ = (
        UniqueConstraint('user_id', 'review_id', name='uq_user_review_like'),
    )

    def __repr__(self):
        return f"<ReviewLike(user_id='{self.user_id}', review_id={self.review_id})>"
