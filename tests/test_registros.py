import io
import os
from datetime import date

import pytest

from app.errors import ErrorValidacion
from app.extensions import db
from app.models.expediente import EvaluacionControl, HistorialLaboral
from app.services import cuip
from app.services.archivos_service import ArchivosService
from app.services.registros_service import RegistrosService, TIPOS_REGISTRO, obtener_tipo

PDF_MINIMO = b'%PDF-1.4\n1 0 obj << >> endobj\ntrailer << >>\n%%EOF\n'


def _post_multipart(client, url, datos, **archivos):
    datos = dict(datos)
    for campo, nombre in archivos.items():
        datos[campo] = (io.BytesIO(PDF_MINIMO), nombre)
    return client.post(url, data=datos, content_type="multipart/form-data")


def _archivos_en(app, carpeta):
    ruta = os.path.join(app.config["UPLOAD_FOLDER"], carpeta)
    return os.listdir(ruta) if os.path.isdir(ruta) else []


def test_descriptores_borrado_logico():
    con_borrado = {clave for clave, tipo in TIPOS_REGISTRO.items() if tipo.borrado_logico}
    assert con_borrado == {"evaluaciones-control", "formacion-inicial", "competencias-basicas"}


def test_crear_evaluacion_con_pdf(app, client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(personal_id),
                          archivo_pdf="constancia.pdf")
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["personal_id"] == personal_id
    assert data["cuip"] == "18MXHGO00012543"
    assert data["activo"] is True
    assert data["archivo_pdf"].startswith("evaluaciones/evaluacion-")
    assert data["archivo_pdf"].endswith(".pdf")
    assert data["esVigente"] == ((date.today().year % 100) - 18 <= 3)
    assert ArchivosService.existe(data["archivo_pdf"])


def test_crear_evaluacion_sin_archivo(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(personal_id))
    assert res.status_code == 201
    assert res.get_json()["data"]["archivo_pdf"] is None


def test_crear_evaluacion_cuip_en_minusculas(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/",
                          datos_evaluacion(personal_id, cuip=" 18mxhgo00012543 "))
    assert res.status_code == 201
    assert res.get_json()["data"]["cuip"] == "18MXHGO00012543"


def test_crear_evaluacion_cuip_invalido(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/",
                          datos_evaluacion(personal_id, cuip="MX123"))
    assert res.status_code == 400
    assert "CUIP" in res.get_json()["message"]
    assert EvaluacionControl.query.count() == 0


def test_cuip_vencido_es_informativo_por_defecto(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/",
                          datos_evaluacion(personal_id, cuip="00MXHGO00012543"))
    assert res.status_code == 201
    assert res.get_json()["data"]["esVigente"] is cuip.es_vigente("00MXHGO00012543")


def test_cuip_vencido_se_rechaza_si_se_configura(app, client, crear_personal, datos_evaluacion):
    app.config["CUIP_RECHAZAR_VENCIDA"] = True
    personal_id = crear_personal()
    anio_viejo = (date.today().year - 10) % 100
    res = _post_multipart(client, "/api/evaluaciones-control/",
                          datos_evaluacion(personal_id, cuip=f"{anio_viejo:02d}MXHGO00012543"))
    assert res.status_code == 400
    assert "vigente" in res.get_json()["message"]


def test_registro_sin_campos_obligatorios(client, crear_personal):
    personal_id = crear_personal()
    res = client.post("/api/historial-laboral/", data={"personal_id": str(personal_id)},
                      content_type="multipart/form-data")
    assert res.status_code == 400
    errores = res.get_json()["errores"]
    assert "funcion" in errores
    assert "periodo" in errores


def test_personal_inexistente_no_deja_archivo(app, client, datos_evaluacion):
    res = _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(9999),
                          archivo_pdf="constancia.pdf")
    assert res.status_code == 404
    assert res.get_json()["message"] == "Personal no encontrado"
    assert _archivos_en(app, "evaluaciones") == []
    assert EvaluacionControl.query.count() == 0


def test_adjunto_no_pdf_se_rechaza(app, client, crear_personal):
    personal_id = crear_personal()
    datos = {
        "personal_id": str(personal_id),
        "motivo": "Renuncia voluntaria",
        "fecha_baja": "2024-02-01",
        "documentos": (io.BytesIO(b"texto"), "baja.docx"),
    }
    res = client.post("/api/separacion-servicio/", data=datos, content_type="multipart/form-data")
    assert res.status_code == 400
    assert res.get_json()["message"] == "Solo se permiten archivos PDF"
    assert _archivos_en(app, "evaluacion-desempeno/separacion-servicio") == []


def test_subregistro_en_carpeta_de_desempeno(client, crear_personal):
    personal_id = crear_personal()
    datos = {
        "personal_id": str(personal_id),
        "tipo": "Estímulo",
        "fecha": "2023-11-20",
        "descripcion": "Reconocimiento al mérito",
    }
    res = _post_multipart(client, "/api/estimulos-sanciones/", datos, documento="oficio.PDF")
    assert res.status_code == 201
    ruta = res.get_json()["data"]["documento"]
    assert ruta.startswith("evaluacion-desempeno/estimulos-sanciones/estimulo-")
    assert ruta.endswith(".pdf")


def test_competencia_acepta_fecha_vigencia(client, crear_personal):
    personal_id = crear_personal()
    datos = {
        "personal_id": str(personal_id),
        "vigencia": "3",
        "resultado": "Aprobado",
        "fechaVigencia": "2024-03-15",
        "institucion": "Academia Estatal",
    }
    res = client.post("/api/competencias-basicas/", data=datos, content_type="multipart/form-data")
    assert res.status_code == 201
    assert res.get_json()["data"]["fecha"] == "2024-03-15"


def test_listar_ordenado_por_fecha(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    for fecha in ("2022-01-10", "2024-06-01", "2023-03-05"):
        _post_multipart(client, "/api/evaluaciones-control/",
                        datos_evaluacion(personal_id, fecha_evaluacion=fecha))

    res = client.get(f"/api/evaluaciones-control/personal/{personal_id}")
    assert res.status_code == 200
    fechas = [r["fecha_evaluacion"] for r in res.get_json()["data"]]
    assert fechas == ["2024-06-01", "2023-03-05", "2022-01-10"]


def test_listar_sin_registros(client, crear_personal):
    personal_id = crear_personal()
    res = client.get(f"/api/historial-laboral/personal/{personal_id}")
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "data": []}


def test_listar_tabla_inexistente(app, client, crear_personal):
    personal_id = crear_personal()
    db.session.close()
    HistorialLaboral.__table__.drop(db.engine)

    res = client.get(f"/api/historial-laboral/personal/{personal_id}")
    assert res.status_code == 200
    assert res.get_json()["data"] == []


def test_borrado_logico_de_evaluacion(app, client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    res = _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(personal_id),
                          archivo_pdf="constancia.pdf")
    registro = res.get_json()["data"]

    res = client.delete(f"/api/evaluaciones-control/{registro['id']}")
    assert res.status_code == 200

    res = client.get(f"/api/evaluaciones-control/personal/{personal_id}")
    assert res.get_json()["data"] == []

    tipo = obtener_tipo("evaluaciones-control")
    db.session.expire_all()
    fila = RegistrosService.obtener(tipo, registro["id"])
    assert fila.activo is False
    assert ArchivosService.existe(registro["archivo_pdf"])


def test_borrado_logico_inexistente(client):
    res = client.delete("/api/formacion-inicial/999")
    assert res.status_code == 404


def test_tipos_sin_borrado_no_exponen_delete(client, crear_personal):
    personal_id = crear_personal()
    datos = {"personal_id": str(personal_id), "funcion": "Patrullaje", "periodo": "2019-2021"}
    res = client.post("/api/historial-laboral/", data=datos, content_type="multipart/form-data")
    registro_id = res.get_json()["data"]["id"]

    assert client.delete(f"/api/historial-laboral/{registro_id}").status_code in (404, 405)
    assert HistorialLaboral.query.count() == 1


def test_eliminar_tipo_sin_borrado_en_servicio(app):
    with pytest.raises(ErrorValidacion):
        RegistrosService.eliminar(obtener_tipo("historial-laboral"), 1)


def test_contar_por_personal(client, crear_personal, datos_evaluacion):
    personal_id = crear_personal()
    _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(personal_id))
    _post_multipart(client, "/api/evaluaciones-control/", datos_evaluacion(personal_id))

    assert RegistrosService.contar_por_personal(personal_id) == {"evaluaciones-control": 2}


@pytest.mark.parametrize("clave", ["evaluaciones-control", "competencias-basicas", "historial-laboral"])
def test_registro_con_cuerpo_json_no_objeto(client, clave):
    res = client.post(f"/api/{clave}/", json=[{"personal_id": 1}])
    assert res.status_code == 400
    assert "_schema" in res.get_json()["errores"]
