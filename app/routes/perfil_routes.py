from flask import Blueprint, jsonify, send_file
from app.services.perfil_service import PerfilService
from app.services.ficha_service import FichaService

perfil_bp = Blueprint('perfil_bp', __name__, url_prefix='/api/perfil')


@perfil_bp.route('/<int:id>', methods=['GET'])
def obtener_perfil(id):
    """Datos personales + todas las secciones del expediente en una sola respuesta."""
    perfil = PerfilService.obtener_perfil(id)
    return jsonify({"success": True, "data": perfil}), 200


@perfil_bp.route('/<int:id>/ficha', methods=['GET'])
def descargar_ficha(id):
    salida, nombre = FichaService.generar(id)
    return send_file(
        salida,
        download_name=nombre,
        as_attachment=True,
        mimetype='application/vnd.openxmlformats-officedocument.wordprocessingml.document'
    )
