# app/routes/personal_routes.py
from flask import Blueprint, request, jsonify
from app.services.personal_service import PersonalService
from app.schemas.personal_schema import personal_schema, personales_schema
from app.errors import ErrorValidacion

personal_bp = Blueprint('personal_bp', __name__, url_prefix='/api/personal')


def _leer_datos():
    """Acepta JSON o multipart (con la foto de perfil en el campo 'foto')."""
    if request.is_json:
        return request.get_json(silent=True) or {}, None

    foto = request.files.get('foto')
    if foto is not None and not foto.filename:
        foto = None
    return request.form.to_dict(), foto

# =======================================================
# RUTAS API (JSON)
# =======================================================

@personal_bp.route('/', methods=['GET'])
def listar_personal():
    personal = PersonalService.listar()
    return jsonify({"success": True, "data": personales_schema.dump(personal)}), 200

@personal_bp.route('/search', methods=['GET'])
def buscar_personal():
    """Busca por nombre, apellidos o CURP (?query=)."""
    resultados = PersonalService.buscar(request.args.get('query'))
    return jsonify({"success": True, "data": personales_schema.dump(resultados)}), 200

@personal_bp.route('/<int:id>', methods=['GET'])
def obtener_personal(id):
    persona = PersonalService.obtener(id)
    return jsonify({"success": True, "data": personal_schema.dump(persona)}), 200

@personal_bp.route('/', methods=['POST'])
def crear_personal():
    json_data, foto = _leer_datos()
    if not json_data:
        raise ErrorValidacion('No se enviaron datos')

    data = personal_schema.load(json_data)
    nueva = PersonalService.crear(data, foto=foto)
    return jsonify({
        "success": True,
        "message": "Personal registrado exitosamente",
        "data": personal_schema.dump(nueva)
    }), 201

@personal_bp.route('/<int:id>', methods=['PUT'])
def actualizar_personal(id):
    json_data, foto = _leer_datos()
    data = personal_schema.load(json_data, partial=True)
    persona = PersonalService.actualizar(id, data, foto=foto)
    return jsonify({
        "success": True,
        "message": "Personal actualizado exitosamente",
        "data": personal_schema.dump(persona)
    }), 200

@personal_bp.route('/<int:id>', methods=['DELETE'])
def eliminar_personal(id):
    PersonalService.eliminar(id)
    return jsonify({"success": True, "message": "Personal eliminado exitosamente"}), 200

@personal_bp.route('/<int:id>/estatus', methods=['PATCH'])
def cambiar_estatus(id):
    json_data = request.get_json(silent=True) or {}
    persona = PersonalService.cambiar_estatus(id, json_data.get('estatus'))
    return jsonify({
        "success": True,
        "message": "Estatus actualizado",
        "data": personal_schema.dump(persona)
    }), 200
