# app/services/perfil_service.py
import logging
from concurrent.futures import ThreadPoolExecutor

from flask import current_app

from app.schemas.personal_schema import personal_schema
from app.services.personal_service import PersonalService
from app.services.registros_service import RegistrosService, obtener_tipo

logger = logging.getLogger(__name__)

# Sección del perfil -> tipo de registro
SECCIONES_PERFIL = {
    'evaluaciones': 'evaluaciones-control',
    'formacion': 'formacion-inicial',
    'historial': 'historial-laboral',
    'incapacidades': 'incapacidades-ausencias',
    'estimulos': 'estimulos-sanciones',
    'separacion': 'separacion-servicio',
}


class PerfilService:

    @staticmethod
    def _cargar_seccion(app, clave_tipo, personal_id):
        # Cada hilo usa su propio contexto de aplicación (y por lo tanto su propia sesión)
        with app.app_context():
            tipo = obtener_tipo(clave_tipo)
            try:
                registros = RegistrosService.listar(tipo, personal_id)
                return tipo.schema_lista.dump(registros)
            except Exception as e:
                logger.warning("No se pudo cargar %s del personal %s: %s", clave_tipo, personal_id, e)
                return []

    @staticmethod
    def obtener_perfil(personal_id):
        """
        Ficha completa del elemento: datos personales + las seis secciones del expediente.
        Solo falla si el personal no existe; una sección con error se entrega vacía.
        """
        persona = PersonalService.obtener(personal_id)
        perfil = personal_schema.dump(persona)

        app = current_app._get_current_object()
        workers = max(1, int(current_app.config.get('PERFIL_MAX_WORKERS', 6)))

        with ThreadPoolExecutor(max_workers=min(workers, len(SECCIONES_PERFIL))) as executor:
            futuros = {
                seccion: executor.submit(PerfilService._cargar_seccion, app, clave_tipo, persona.id)
                for seccion, clave_tipo in SECCIONES_PERFIL.items()
            }
            for seccion, futuro in futuros.items():
                try:
                    perfil[seccion] = futuro.result()
                except Exception as e:
                    logger.warning("Sección %s del perfil %s descartada: %s", seccion, personal_id, e)
                    perfil[seccion] = []

        return perfil
