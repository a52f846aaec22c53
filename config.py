# config.py
import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _uri_base_datos():
    # DATABASE_URL (ej. PostgreSQL en la nube) tiene prioridad sobre las variables sueltas
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']
    return (
        f"mysql+mysqlconnector://{os.environ.get('DB_USER')}:"
        f"{os.environ.get('DB_PASSWORD')}@"
        f"{os.environ.get('DB_HOST')}/"
        f"{os.environ.get('DB_NAME')}"
    )


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev_key'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = _uri_base_datos()

    # Archivos adjuntos
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'uploads')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    LIMITE_PDF_BYTES = 5 * 1024 * 1024
    LIMITE_FOTO_BYTES = 2 * 1024 * 1024

    # Crea las tablas faltantes al arrancar
    AUTO_MIGRAR = True

    # False: la vigencia del CUIP solo se informa (esVigente), no bloquea el registro
    CUIP_RECHAZAR_VENCIDA = os.environ.get('CUIP_RECHAZAR_VENCIDA', '').lower() in ('1', 'true', 'si')

    PERFIL_MAX_WORKERS = int(os.environ.get('PERFIL_MAX_WORKERS', 6))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    UPLOAD_FOLDER = os.path.join(BASE_DIR, 'uploads_test')
    CUIP_RECHAZAR_VENCIDA = False
    LOG_LEVEL = 'WARNING'
