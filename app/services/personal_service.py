# app/services/personal_service.py
import logging
import re

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from app.errors import ErrorValidacion, NoEncontrado, ClaveDuplicada, es_clave_duplicada
from app.extensions import db
from app.models.personal import Personal, ESTATUS_VALIDOS
from app.services.archivos_service import ArchivosService, CATEGORIA_FOTOS
from app.services.registros_service import RegistrosService

logger = logging.getLogger(__name__)

CAMPOS_OBLIGATORIOS = [
    'apellido_paterno', 'nombres', 'fecha_nacimiento', 'fecha_ingreso',
    'grado_cargo', 'sexo', 'curp', 'escolaridad', 'telefono_contacto'
]

CURP_BUSQUEDA = re.compile(r'^[A-Z0-9]{18}$', re.IGNORECASE)
LIMITE_BUSQUEDA = 50


class PersonalService:

    # =======================================================
    # MÉTODOS CRUD BÁSICOS
    # =======================================================

    @staticmethod
    def listar():
        """Obtiene todo el personal ordenado por apellidos y nombres"""
        return Personal.query.order_by(
            Personal.apellido_paterno, Personal.apellido_materno, Personal.nombres
        ).all()

    @staticmethod
    def obtener(personal_id):
        persona = db.session.get(Personal, personal_id)
        if persona is None:
            raise NoEncontrado('Personal no encontrado')
        return persona

    @staticmethod
    def _verificar_obligatorios(data, parcial=False):
        faltantes = []
        for campo in CAMPOS_OBLIGATORIOS:
            if parcial and campo not in data:
                continue
            valor = data.get(campo)
            if valor is None or (isinstance(valor, str) and not valor.strip()):
                faltantes.append(campo)
        if faltantes:
            raise ErrorValidacion(
                f"Todos los campos son obligatorios, excepto la foto de perfil. Faltan: {', '.join(faltantes)}"
            )

    @staticmethod
    def _curp_en_uso(curp, excluir_id=None):
        consulta = Personal.query.filter(func.upper(Personal.curp) == curp.upper())
        if excluir_id is not None:
            consulta = consulta.filter(Personal.id != excluir_id)
        return db.session.query(consulta.exists()).scalar()

    @staticmethod
    def _guardar(mensaje_duplicado):
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if es_clave_duplicada(e):
                raise ClaveDuplicada(mensaje_duplicado)
            raise

    @staticmethod
    def crear(data, foto=None):
        """
        Crea un nuevo elemento.
        Recibe el diccionario ya validado por PersonalSchema y, opcionalmente, la foto de perfil.
        """
        PersonalService._verificar_obligatorios(data)
        data = dict(data)
        data['curp'] = data['curp'].upper()

        if PersonalService._curp_en_uso(data['curp']):
            raise ClaveDuplicada('El CURP ya está registrado')

        with ArchivosService.operacion_con_adjunto(foto, CATEGORIA_FOTOS, 'foto-') as ruta_foto:
            if ruta_foto:
                data['foto_perfil'] = ruta_foto
            nueva = Personal(**data)
            db.session.add(nueva)
            PersonalService._guardar('El CURP ya está registrado')

        logger.info("Personal registrado id=%s curp=%s", nueva.id, nueva.curp)
        return nueva

    @staticmethod
    def actualizar(personal_id, data, foto=None):
        """
        Actualización parcial. Si foto_perfil no viene (o viene nula) se
        conserva la foto anterior.
        """
        persona = PersonalService.obtener(personal_id)
        PersonalService._verificar_obligatorios(data, parcial=True)
        data = dict(data)

        if data.get('curp'):
            data['curp'] = data['curp'].upper()
            if PersonalService._curp_en_uso(data['curp'], excluir_id=persona.id):
                raise ClaveDuplicada('El CURP ya está registrado para otro miembro del personal')

        if data.get('foto_perfil') is None:
            data.pop('foto_perfil', None)

        with ArchivosService.operacion_con_adjunto(foto, CATEGORIA_FOTOS, 'foto-') as ruta_foto:
            if ruta_foto:
                data['foto_perfil'] = ruta_foto
            for key, value in data.items():
                if hasattr(persona, key):
                    setattr(persona, key, value)
            PersonalService._guardar('El CURP ya está registrado para otro miembro del personal')

        logger.info("Personal id=%s actualizado (%s)", persona.id, ', '.join(sorted(data)))
        return persona

    @staticmethod
    def eliminar(personal_id):
        """
        Borrado físico. Se bloquea mientras existan registros del expediente
        asociados, para no dejar filas huérfanas.
        """
        persona = PersonalService.obtener(personal_id)

        asociados = RegistrosService.contar_por_personal(persona.id)
        if asociados:
            detalle = ', '.join(f"{clave} ({total})" for clave, total in asociados.items())
            raise ErrorValidacion(
                f"No se puede eliminar: el personal tiene registros asociados en {detalle}"
            )

        db.session.delete(persona)
        db.session.commit()
        logger.info("Personal id=%s eliminado", personal_id)
        return True

    @staticmethod
    def cambiar_estatus(personal_id, estatus):
        if estatus not in ESTATUS_VALIDOS:
            raise ErrorValidacion(f"Estatus inválido. Valores permitidos: {', '.join(ESTATUS_VALIDOS)}")

        persona = PersonalService.obtener(personal_id)
        persona.estatus = estatus
        db.session.commit()
        logger.info("Personal id=%s cambia a estatus %s", persona.id, estatus)
        return persona

    # =======================================================
    # BÚSQUEDA
    # =======================================================

    @staticmethod
    def buscar(termino):
        """
        Un término de 18 caracteres alfanuméricos se trata como CURP (coincidencia exacta).
        Cualquier otro se busca como fragmento de nombres/apellidos, sin distinguir mayúsculas.
        '%' y '_' se buscan literalmente.
        """
        termino = (termino or '').strip()
        if not termino:
            raise ErrorValidacion('El término de búsqueda es requerido')

        if CURP_BUSQUEDA.match(termino):
            return Personal.query.filter(func.upper(Personal.curp) == termino.upper()).all()

        nombre_completo = (
            Personal.apellido_paterno + ' ' +
            func.coalesce(Personal.apellido_materno, '') + ' ' +
            Personal.nombres
        )
        return (
            Personal.query
            .filter(or_(
                Personal.nombres.icontains(termino, autoescape=True),
                Personal.apellido_paterno.icontains(termino, autoescape=True),
                Personal.apellido_materno.icontains(termino, autoescape=True),
                nombre_completo.icontains(termino, autoescape=True),
            ))
            .order_by(Personal.apellido_paterno, Personal.apellido_materno, Personal.nombres)
            .limit(LIMITE_BUSQUEDA)
            .all()
        )
