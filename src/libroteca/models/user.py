"""
Modelo ORM para la entidad User en la base de datos de Libroteca.
Define los campos de perfil de un usuario y sus relaciones con reseñas,
lista de lectura y "me gusta".

El identificador lo asigna el proveedor de autenticación externo, por eso es
una cadena y no un entero autoincremental.
"""

from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from libroteca.db.session import Base

class User(Base):
    """
    Representa un usuario de la aplicación.

    Atributos:
        id (str): Identificador del usuario (inmutable, lo asigna la capa de autenticación).
        email (str): Correo electrónico único (opcional).
        first_name (str): Nombre.
        last_name (str): Apellidos.
        profile_image_url (str): URL del avatar.
        bio (str): Biografía libre.
        location (str): Ubicación.
        created_at (datetime): Fecha de creación del usuario.
        updated_at (datetime): Fecha de última actualización del usuario.
        reviews (List[Review]): Reseñas escritas por el usuario.
        reading_list (List[ReadingListEntry]): Entradas de su lista de lectura.
        review_likes (List[ReviewLike]): "Me gusta" que ha dado.
    """
    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(512), nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    reviews = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    reading_list = relationship(
        "ReadingListEntry",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    review_likes = relationship(
        "ReviewLike",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        """Nombre visible: nombre y apellidos, o el email si no hay nombre."""
        full_name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full_name or self.email or self.id

    def __repr__(self) -> str:
        """
        Representación legible del objeto User para depuración.

        Returns:
            str: Cadena representando el usuario.
        """
        return f"<User(id='{self.id}', email='{self.email}')>"
