# app/routes/reportes_routes.py
from datetime import datetime
from flask import Blueprint, request, jsonify, send_file
from app.services.reportes_service import ReportesService
from app.schemas.personal_schema import personal_schema
from app.errors import ErrorValidacion

reportes_bp = Blueprint('reportes_bp', __name__, url_prefix='/api/reportes')


@reportes_bp.route('/search', methods=['GET'])
def buscar():
    resultados = ReportesService.buscar(request.args.get('query'))
    return jsonify({"success": True, "data": resultados}), 200


@reportes_bp.route('/summary', methods=['GET'])
def resumen():
    return jsonify({"success": True, "data": ReportesService.resumen()}), 200


@reportes_bp.route('/status', methods=['PUT'])
def actualizar_estatus():
    json_data = request.get_json(silent=True) or {}
    personal_id = json_data.get('id')
    if personal_id is None:
        raise ErrorValidacion('Se requiere el id del personal')

    try:
        personal_id = int(personal_id)
    except (TypeError, ValueError):
        raise ErrorValidacion('ID de personal no válido')

    persona = ReportesService.cambiar_estatus(personal_id, json_data.get('estatus'))
    return jsonify({
        "success": True,
        "message": "Estatus actualizado correctamente",
        "data": personal_schema.dump(persona)
    }), 200


@reportes_bp.route('/exportar', methods=['GET'])
def exportar():
    """Descarga la nómina en Excel."""
    output = ReportesService.exportar_excel()
    return send_file(
        output,
        download_name=f"Nomina_Personal_{datetime.now().strftime('%Y%m%d')}.xlsx",
        as_attachment=True,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
