"""
CRUD para usuarios.
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.crud.base import CRUDBase
from app.db.base import utcnow
from app.models.user import User
from app.schemas.user import UserUpsert

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserUpsert, UserUpsert]):
    """CRUD específico para usuarios."""

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        """
        Obtener usuario por email.

        Args:
            db: Sesión de base de datos
            email: Email del usuario

        Returns:
            Usuario encontrado o None
        """
        return db.query(User).filter(User.email == email).first()

    def _without_foreign_email(self, db: Session, profile: Dict[str, Any]) -> Dict[str, Any]:
        """Quitar el email del perfil si ya pertenece a otro usuario."""
        email = profile.get("email")
        if email is None:
            return profile

        owner = self.get_by_email(db, email=email)
        if owner is None or owner.id == profile["id"]:
            return profile

        logger.warning(
            f"Email del token de {profile['id']} ya pertenece al usuario {owner.id}; "
            f"se conserva el perfil sin email"
        )
        return {field: value for field, value in profile.items() if field != "email"}

    def _save_profile(self, db: Session, profile: Dict[str, Any]) -> User:
        db_obj = self.get(db, profile["id"])
        if db_obj is None:
            db_obj = User(**profile)
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj

        changed = {
            field: value for field, value in profile.items()
            if getattr(db_obj, field) != value
        }
        if not changed:
            return db_obj
        return self.update(db, db_obj=db_obj, obj_in={**changed, "updated_at": utcnow()})

    def upsert(self, db: Session, *, obj_in: UserUpsert) -> User:
        """
        Crear o actualizar el usuario con el perfil del proveedor de identidad.

        Idempotente: repetir la llamada con el mismo perfil no escribe nada.
        Solo se sobrescriben los campos presentes en el perfil. Si el email
        ya pertenece a otro usuario, el perfil se guarda sin él.

        Args:
            db: Sesión de base de datos
            obj_in: Perfil (ID = claim "sub")

        Returns:
            Usuario persistido
        """
        profile = self._without_foreign_email(db, obj_in.model_dump(exclude_none=True))
        try:
            return self._save_profile(db, profile)
        except IntegrityError:
            # Otra solicitud creó el mismo usuario o tomó el email en paralelo
            db.rollback()
            return self._save_profile(db, self._without_foreign_email(db, profile))


# Instancia global del CRUD
user = CRUDUser(User)
