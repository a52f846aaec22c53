# app/services/esquema_service.py
import logging

from sqlalchemy import inspect

from app.extensions import db

logger = logging.getLogger(__name__)

# Orden de creación: la tabla raíz antes que las que la referencian
TABLAS = [
    'personal',
    'evaluaciones_control',
    'formacion_inicial',
    'competencias_basicas',
    'historial_laboral',
    'incapacidades_ausencias',
    'estimulos_sanciones',
    'separacion_servicio',
]


class EsquemaService:

    @staticmethod
    def tabla_existe(nombre):
        return inspect(db.engine).has_table(nombre)

    @staticmethod
    def asegurar_tabla(nombre):
        """
        Crea la tabla si no existe usando el DDL de su modelo.
        Devuelve True si la creó, False si ya estaba. Los errores del DDL se propagan.
        """
        tabla = db.metadata.tables.get(nombre)
        if tabla is None:
            raise ValueError(f"No hay definición registrada para la tabla '{nombre}'")

        if EsquemaService.tabla_existe(nombre):
            return False

        logger.info("La tabla %s no existe. Creándola...", nombre)
        tabla.create(bind=db.engine, checkfirst=True)
        logger.info("Tabla %s creada exitosamente", nombre)
        return True

    @staticmethod
    def migrar():
        """Ejecuta una sola vez, al arrancar, la verificación de todas las tablas."""
        creadas = [nombre for nombre in TABLAS if EsquemaService.asegurar_tabla(nombre)]
        if creadas:
            logger.info("Migración inicial: %d tabla(s) creada(s): %s", len(creadas), ', '.join(creadas))
        return creadas
