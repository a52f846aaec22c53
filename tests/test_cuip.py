from datetime import date

import pytest

from app.errors import ErrorValidacion
from app.services import cuip


def test_analizar_cuip_valido():
    resultado = cuip.analizar("18MXHGO00012543", hoy=date(2020, 6, 1))
    assert resultado == {
        "valido": True,
        "anio": 18,
        "estado": "MXHGO",
        "consecutivo": "00012543",
        "esVigente": True,
    }


@pytest.mark.parametrize("valor", ["", None, "18MXHGO0001254", "1XMXHGO00012543", "18MXH1O00012543"])
def test_formato_invalido(valor):
    assert cuip.analizar(valor) == {"valido": False}
    assert cuip.es_vigente(valor) is False
    with pytest.raises(ErrorValidacion):
        cuip.validar(valor)


def test_vigencia_limite_de_tres_anios():
    assert cuip.es_vigente("18MXHGO00012543", hoy=date(2021, 12, 31)) is True
    assert cuip.es_vigente("18MXHGO00012543", hoy=date(2022, 1, 1)) is False


def test_normaliza_minusculas_y_espacios():
    assert cuip.analizar("  18mxhgo00012543 ", hoy=date(2019, 1, 1))["valido"] is True


def test_validar_no_exige_vigencia_por_defecto():
    resultado = cuip.validar("10MXHGO00012543", hoy=date(2026, 1, 1))
    assert resultado["esVigente"] is False


def test_validar_exigiendo_vigencia():
    with pytest.raises(ErrorValidacion, match="no está vigente"):
        cuip.validar("10MXHGO00012543", exigir_vigencia=True, hoy=date(2026, 1, 1))
    assert cuip.validar("24MXHGO00012543", exigir_vigencia=True, hoy=date(2026, 1, 1))["valido"]
