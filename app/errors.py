# app/errors.py
import logging

from flask import jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

logger = logging.getLogger(__name__)


class ErrorExpediente(Exception):
    """Error de negocio con su código HTTP asociado."""
    status_code = 500

    def __init__(self, mensaje):
        super().__init__(mensaje)
        self.mensaje = mensaje


class ErrorValidacion(ErrorExpediente):
    status_code = 400


class NoEncontrado(ErrorExpediente):
    status_code = 404


class ClaveDuplicada(ErrorExpediente):
    status_code = 400


class ErrorArchivo(ErrorValidacion):
    """Adjunto rechazado (tipo no permitido, tamaño excedido o vacío)."""


# =======================================================
# SEÑALES DEL MOTOR DE BASE DE DATOS
# =======================================================

def _codigo_motor(error):
    orig = getattr(error, 'orig', error)
    # psycopg2 expone pgcode, mysql-connector expone errno
    return getattr(orig, 'pgcode', None) or getattr(orig, 'errno', None)


def es_clave_duplicada(error):
    """True si el IntegrityError corresponde a una violación de unicidad."""
    codigo = _codigo_motor(error)
    if codigo in ('23505', 1062):
        return True
    return 'UNIQUE constraint failed' in str(getattr(error, 'orig', error))


def es_tabla_inexistente(error):
    """True si el error indica que la tabla consultada no existe."""
    codigo = _codigo_motor(error)
    if codigo in ('42P01', 1146):
        return True
    return 'no such table' in str(getattr(error, 'orig', error))


# =======================================================
# MANEJADORES GLOBALES (Sobre de respuesta común)
# =======================================================

def registrar_manejadores(app):

    @app.errorhandler(ErrorExpediente)
    def manejar_error_expediente(err):
        return jsonify({"success": False, "message": err.mensaje}), err.status_code

    @app.errorhandler(ValidationError)
    def manejar_validacion(err):
        return jsonify({
            "success": False,
            "message": "Datos inválidos",
            "errores": err.messages
        }), 400

    @app.errorhandler(RequestEntityTooLarge)
    def manejar_archivo_grande(err):
        return jsonify({"success": False, "message": "El archivo excede el tamaño permitido"}), 400

    @app.errorhandler(404)
    def manejar_no_encontrado(err):
        return jsonify({"success": False, "message": "Ruta no encontrada"}), 404

    @app.errorhandler(Exception)
    def manejar_inesperado(err):
        if isinstance(err, HTTPException):
            return jsonify({"success": False, "message": err.description}), err.code

        logger.exception("Error no controlado: %s", err)
        cuerpo = {"success": False, "message": "Error en el servidor"}
        if current_app.debug:
            cuerpo["error"] = str(err)
        return jsonify(cuerpo), 500
