# app/services/cuip.py
"""
CUIP de evaluaciones de control de confianza.

Formato: 2 dígitos (año de emisión) + 5 letras (entidad/dependencia) + 8 dígitos (consecutivo).
Ejemplo: 18MXHGO00012543.

Se exponen dos primitivas: `es_vigente` (informativa) y `validar` (bloqueante).
Cada llamador decide cuál aplicar.
"""
import re
from datetime import date

from app.errors import ErrorValidacion

CUIP_REGEX = re.compile(r'^(\d{2})([A-Z]{5})(\d{8})$')
ANIOS_VIGENCIA = 3


def normalizar(valor):
    return (valor or '').strip().upper()


def analizar(valor, hoy=None):
    match = CUIP_REGEX.match(normalizar(valor))
    if not match:
        return {'valido': False}

    anio, estado, consecutivo = match.groups()
    anio_actual = (hoy or date.today()).year % 100
    anio_emision = int(anio)

    return {
        'valido': True,
        'anio': anio_emision,
        'estado': estado,
        'consecutivo': consecutivo,
        'esVigente': (anio_actual - anio_emision) <= ANIOS_VIGENCIA
    }


def es_vigente(valor, hoy=None):
    """Devuelve True/False según la antigüedad del CUIP; False si el formato no es válido."""
    return analizar(valor, hoy).get('esVigente', False)


def validar(valor, exigir_vigencia=False, hoy=None):
    """Valida el formato (y opcionalmente la vigencia). Lanza ErrorValidacion."""
    resultado = analizar(valor, hoy)
    if not resultado['valido']:
        raise ErrorValidacion('Formato de CUIP inválido. Debe seguir el formato: 18MXHGO00012543')
    if exigir_vigencia and not resultado['esVigente']:
        raise ErrorValidacion(
            f"El CUIP {normalizar(valor)} tiene más de {ANIOS_VIGENCIA} años de antigüedad y no está vigente"
        )
    return resultado
