from app.errors import es_clave_duplicada, es_tabla_inexistente


class _ErrorMotor(Exception):
    def __init__(self, mensaje, pgcode=None, errno=None):
        super().__init__(mensaje)
        self.pgcode = pgcode
        self.errno = errno


class _ErrorSQLAlchemy(Exception):
    def __init__(self, orig):
        super().__init__(str(orig))
        self.orig = orig


def test_clave_duplicada_por_motor():
    assert es_clave_duplicada(_ErrorSQLAlchemy(_ErrorMotor("duplicate key", pgcode="23505")))
    assert es_clave_duplicada(_ErrorSQLAlchemy(_ErrorMotor("Duplicate entry", errno=1062)))
    assert es_clave_duplicada(_ErrorSQLAlchemy(_ErrorMotor("UNIQUE constraint failed: personal.curp")))
    assert not es_clave_duplicada(_ErrorSQLAlchemy(_ErrorMotor("NOT NULL constraint failed", errno=1048)))


def test_tabla_inexistente_por_motor():
    assert es_tabla_inexistente(_ErrorSQLAlchemy(_ErrorMotor("relation does not exist", pgcode="42P01")))
    assert es_tabla_inexistente(_ErrorSQLAlchemy(_ErrorMotor("Table doesn't exist", errno=1146)))
    assert es_tabla_inexistente(_ErrorSQLAlchemy(_ErrorMotor("no such table: historial_laboral")))
    assert not es_tabla_inexistente(_ErrorSQLAlchemy(_ErrorMotor("syntax error", pgcode="42601")))


def test_ruta_inexistente(client):
    res = client.get("/api/no-existe")
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "message": "Ruta no encontrada"}


def test_tipo_de_registro_desconocido(client):
    assert client.get("/api/nominas/personal/1").status_code == 404


def test_error_inesperado_responde_500(app, client, monkeypatch):
    from app.services.personal_service import PersonalService

    def _falla():
        raise RuntimeError("conexión perdida")

    monkeypatch.setattr(PersonalService, "listar", staticmethod(_falla))
    res = client.get("/api/personal/")
    assert res.status_code == 500
    body = res.get_json()
    assert body["message"] == "Error en el servidor"
    assert "error" not in body
