# app/routes/registros_routes.py
# Un Blueprint por tipo de registro del expediente: /api/<tipo>/...
from flask import Blueprint, request, jsonify
from app.services.registros_service import RegistrosService, TIPOS_REGISTRO


def crear_blueprint(tipo):
    bp = Blueprint(f"{tipo.clave.replace('-', '_')}_bp", __name__, url_prefix=f'/api/{tipo.clave}')

    @bp.route('/', methods=['POST'])
    def crear_registro():
        """Recibe multipart (campos + archivo opcional) o JSON sin archivo."""
        if request.is_json:
            data, archivo = request.get_json(silent=True) or {}, None
        else:
            data = request.form.to_dict()
            archivo = request.files.get(tipo.campo_archivo)
            if archivo is not None and not archivo.filename:
                archivo = None

        registro = RegistrosService.crear(tipo, data, archivo)
        return jsonify({
            "success": True,
            "message": f"{tipo.nombre} registrado correctamente",
            "data": tipo.schema.dump(registro)
        }), 201

    @bp.route('/personal/<int:personal_id>', methods=['GET'])
    def listar_registros(personal_id):
        registros = RegistrosService.listar(tipo, personal_id)
        return jsonify({"success": True, "data": tipo.schema_lista.dump(registros)}), 200

    if tipo.borrado_logico:
        @bp.route('/<int:id>', methods=['DELETE'])
        def eliminar_registro(id):
            RegistrosService.eliminar(tipo, id)
            return jsonify({"success": True, "message": "Registro eliminado"}), 200

    return bp


registros_blueprints = [crear_blueprint(tipo) for tipo in TIPOS_REGISTRO.values()]
