import pytest

from app import create_app
from app.extensions import db
from config import TestingConfig


@pytest.fixture
def app(tmp_path):
    # Archivo SQLite (no en memoria): el perfil consulta desde varios hilos
    class ConfigPrueba(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'expediente.db'}"
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(ConfigPrueba)
    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def datos_personal():
    def _datos(**cambios):
        datos = {
            "nombres": "Juan",
            "apellido_paterno": "Pérez",
            "apellido_materno": "Lopez",
            "curp": "AAAA000101HDFXXX01",
            "fecha_nacimiento": "1990-01-01",
            "sexo": "Masculino",
            "escolaridad": "Licenciatura",
            "telefono_contacto": "5512345678",
            "fecha_ingreso": "2015-03-01",
            "grado_cargo": "Policía Tercero",
        }
        datos.update(cambios)
        return datos
    return _datos


@pytest.fixture
def crear_personal(client, datos_personal):
    """Registra un elemento vía API y devuelve su id."""
    def _crear(**cambios):
        res = client.post("/api/personal/", json=datos_personal(**cambios))
        assert res.status_code == 201, res.get_json()
        return res.get_json()["data"]["id"]
    return _crear


@pytest.fixture
def datos_evaluacion():
    def _datos(personal_id, **cambios):
        datos = {
            "personal_id": str(personal_id),
            "cuip": "18MXHGO00012543",
            "tipo_evaluacion": "Integral",
            "fecha_evaluacion": "2024-05-10",
            "resultado": "aprobado",
            "vigencia": "2027-05-10",
        }
        datos.update(cambios)
        return datos
    return _datos
