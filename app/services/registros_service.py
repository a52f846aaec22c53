# app/services/registros_service.py
import logging

from flask import current_app
from sqlalchemy.exc import DBAPIError

from app.errors import ErrorValidacion, NoEncontrado, es_tabla_inexistente
from app.extensions import db
from app.models.personal import Personal
from app.models.expediente import (
    EvaluacionControl, FormacionInicial, CompetenciaBasica,
    HistorialLaboral, IncapacidadAusencia, EstimuloSancion, SeparacionServicio
)
from app.schemas.expediente_schema import (
    EvaluacionControlSchema, FormacionInicialSchema, CompetenciaBasicaSchema,
    HistorialLaboralSchema, IncapacidadAusenciaSchema, EstimuloSancionSchema,
    SeparacionServicioSchema
)
from app.services import cuip
from app.services.archivos_service import ArchivosService

logger = logging.getLogger(__name__)


def _validar_evaluacion(data):
    exigir = current_app.config.get('CUIP_RECHAZAR_VENCIDA', False)
    data['cuip'] = cuip.normalizar(data['cuip'])
    cuip.validar(data['cuip'], exigir_vigencia=exigir)


class TipoRegistro:
    """
    Descriptor de un tipo de registro del expediente.

    borrado_logico indica si el tipo admite eliminación (activo = False).
    Los tipos sin esa capacidad no exponen ruta DELETE.
    """

    def __init__(self, clave, nombre, modelo, schema_cls, campo_archivo, prefijo_archivo,
                 campo_orden, borrado_logico=False, validador=None, categoria_archivo=None):
        self.clave = clave
        self.nombre = nombre
        self.modelo = modelo
        self.schema = schema_cls()
        self.schema_lista = schema_cls(many=True)
        self.campo_archivo = campo_archivo
        self.prefijo_archivo = prefijo_archivo
        self.campo_orden = campo_orden
        self.borrado_logico = borrado_logico
        self.validador = validador
        self.categoria_archivo = categoria_archivo or clave

    @property
    def tabla(self):
        return self.modelo.__tablename__

    def __repr__(self):
        return f"<TipoRegistro {self.clave}>"


TIPOS_REGISTRO = {t.clave: t for t in [
    TipoRegistro('evaluaciones-control', 'Evaluación de control', EvaluacionControl, EvaluacionControlSchema,
                 'archivo_pdf', 'evaluacion-', 'fecha_evaluacion',
                 borrado_logico=True, validador=_validar_evaluacion, categoria_archivo='evaluaciones'),
    TipoRegistro('formacion-inicial', 'Formación inicial', FormacionInicial, FormacionInicialSchema,
                 'archivo_pdf', 'formacion-', 'fecha', borrado_logico=True),
    TipoRegistro('competencias-basicas', 'Competencia básica', CompetenciaBasica, CompetenciaBasicaSchema,
                 'archivo_pdf', 'competencia-', 'fecha', borrado_logico=True),
    TipoRegistro('historial-laboral', 'Historial laboral', HistorialLaboral, HistorialLaboralSchema,
                 'documento_comprobatorio', 'historial-', 'fecha_registro'),
    TipoRegistro('incapacidades-ausencias', 'Incapacidad/Ausencia', IncapacidadAusencia, IncapacidadAusenciaSchema,
                 'documentos', 'incapacidad-', 'fecha_registro'),
    TipoRegistro('estimulos-sanciones', 'Estímulo/Sanción', EstimuloSancion, EstimuloSancionSchema,
                 'documento', 'estimulo-', 'fecha'),
    TipoRegistro('separacion-servicio', 'Separación del servicio', SeparacionServicio, SeparacionServicioSchema,
                 'documentos', 'separacion-', 'fecha_baja'),
]}


def obtener_tipo(clave):
    tipo = TIPOS_REGISTRO.get(clave)
    if not tipo:
        raise NoEncontrado(f"Tipo de registro desconocido: {clave}")
    return tipo


class RegistrosService:

    @staticmethod
    def crear(tipo, data, archivo=None):
        """
        Registra un elemento del expediente.
        1. Valida campos (marshmallow) y reglas del tipo.
        2. Guarda el adjunto y, dentro de la misma unidad de trabajo, verifica
           que exista el personal, inserta y hace commit. Si algo falla el
           archivo se borra.
        """
        datos = tipo.schema.load(data)
        if tipo.validador:
            tipo.validador(datos)

        with ArchivosService.operacion_con_adjunto(archivo, tipo.categoria_archivo, tipo.prefijo_archivo) as ruta:
            if db.session.get(Personal, datos['personal_id']) is None:
                raise NoEncontrado('Personal no encontrado')

            registro = tipo.modelo(**datos)
            setattr(registro, tipo.campo_archivo, ruta)
            db.session.add(registro)
            db.session.commit()

        logger.info("%s registrado (id=%s, personal_id=%s, adjunto=%s)",
                    tipo.nombre, registro.id, registro.personal_id, ruta)
        return registro

    @staticmethod
    def listar(tipo, personal_id):
        """
        Registros del personal, del más reciente al más antiguo según la fecha propia del tipo.
        Si la tabla todavía no existe se responde lista vacía (no es un error).
        """
        modelo = tipo.modelo
        consulta = modelo.query.filter_by(personal_id=personal_id)
        if tipo.borrado_logico:
            consulta = consulta.filter(modelo.activo.is_(True))

        try:
            return consulta.order_by(getattr(modelo, tipo.campo_orden).desc(), modelo.id.desc()).all()
        except DBAPIError as e:
            if es_tabla_inexistente(e):
                db.session.rollback()
                logger.warning("La tabla %s no existe; se devuelve lista vacía", tipo.tabla)
                return []
            raise

    @staticmethod
    def obtener(tipo, registro_id):
        """Lectura directa por id, incluidos los registros dados de baja."""
        registro = db.session.get(tipo.modelo, registro_id)
        if registro is None:
            raise NoEncontrado('Registro no encontrado')
        return registro

    @staticmethod
    def eliminar(tipo, registro_id):
        """
        Borrado lógico: activo = False. El archivo adjunto se conserva
        como respaldo documental.
        """
        if not tipo.borrado_logico:
            raise ErrorValidacion(f"Los registros de {tipo.nombre} no se pueden eliminar")

        registro = RegistrosService.obtener(tipo, registro_id)
        registro.activo = False
        db.session.commit()
        logger.info("%s id=%s desactivado", tipo.nombre, registro_id)
        return registro

    @staticmethod
    def contar_por_personal(personal_id):
        """Cantidad de registros (activos o no) por tipo; omite tablas inexistentes."""
        conteo = {}
        for tipo in TIPOS_REGISTRO.values():
            try:
                total = tipo.modelo.query.filter_by(personal_id=personal_id).count()
            except DBAPIError as e:
                if not es_tabla_inexistente(e):
                    raise
                db.session.rollback()
                total = 0
            if total:
                conteo[tipo.clave] = total
        return conteo
