from flask import Blueprint, request, jsonify, send_from_directory, current_app
from app.services.archivos_service import ArchivosService, CATEGORIA_FOTOS
from app.errors import NoEncontrado

archivos_bp = Blueprint('archivos_bp', __name__)


@archivos_bp.route('/api/upload', methods=['POST'])
def subir_foto():
    """Sube una foto de perfil y devuelve la URL pública bajo /uploads/."""
    ruta = ArchivosService.guardar(request.files.get('foto'), CATEGORIA_FOTOS, 'foto-')
    return jsonify({"success": True, "filePath": f"/uploads/{ruta}"}), 200


@archivos_bp.route('/uploads/<path:ruta>', methods=['GET'])
def descargar_archivo(ruta):
    if not ArchivosService.existe(ruta):
        raise NoEncontrado('Archivo no encontrado')
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], ruta)
