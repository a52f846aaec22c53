import logging

from flask import Flask
from config import DevelopmentConfig
from app.extensions import db, ma


def _configurar_logging(nivel):
    logging.basicConfig(
        level=nivel,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(config_class=DevelopmentConfig):
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configurar_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # 1. Inicializar extensiones
    db.init_app(app)
    ma.init_app(app)

    # 2. Registro de Modelos
    with app.app_context():
        from app.models import personal
        from app.models import expediente

    # 3. Manejo de errores (respuesta {success: false, message})
    from app.errors import registrar_manejadores
    registrar_manejadores(app)

    # 4. Registro de Blueprints

    # --- PERSONAL ---
    from app.routes.personal_routes import personal_bp
    app.register_blueprint(personal_bp)

    # --- REGISTROS DEL EXPEDIENTE (un blueprint por tipo) ---
    from app.routes.registros_routes import registros_blueprints
    for bp in registros_blueprints:
        app.register_blueprint(bp)

    # --- PERFIL, REPORTES Y ARCHIVOS ---
    from app.routes.perfil_routes import perfil_bp
    from app.routes.reportes_routes import reportes_bp
    from app.routes.archivos_routes import archivos_bp
    app.register_blueprint(perfil_bp)
    app.register_blueprint(reportes_bp)
    app.register_blueprint(archivos_bp)

    # 5. Tablas y carpetas de adjuntos
    if app.config.get('AUTO_MIGRAR'):
        from app.services.esquema_service import EsquemaService
        from app.services.archivos_service import ArchivosService
        with app.app_context():
            EsquemaService.migrar()
            ArchivosService.preparar_directorios()

    return app
