"""
CRUD base genérico con operaciones comunes.
"""
from typing import Generic, TypeVar, Type, Optional, Any, Dict
from sqlalchemy.orm import Session
from pydantic import BaseModel
from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Clase base para operaciones CRUD.

    Cada método que escribe hace commit y refresca el objeto, de modo que
    lo retornado refleja lo persistido.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Inicializar CRUD con el modelo ORM.

        Args:
            model: Modelo ORM de SQLAlchemy
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """
        Obtener un registro por ID.

        Args:
            db: Sesión de base de datos
            id: ID del registro

        Returns:
            Registro encontrado o None
        """
        return db.query(self.model).filter(self.model.id == id).first()

    def create(self, db: Session, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """
        Crear un nuevo registro.

        Args:
            db: Sesión de base de datos
            obj_in: Schema con datos de entrada
            **extra: Campos asignados por el servidor (ej: propietario)

        Returns:
            Registro creado
        """
        obj_in_data = obj_in.model_dump()
        db_obj = self.model(**obj_in_data, **extra)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Actualizar un registro existente (solo los campos enviados).

        Args:
            db: Sesión de base de datos
            db_obj: Objeto de base de datos a actualizar
            obj_in: Schema o dict con datos de actualización

        Returns:
            Registro actualizado
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field in update_data:
            if hasattr(db_obj, field):
                setattr(db_obj, field, update_data[field])

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj
