from collections.abc import Mapping

from marshmallow import pre_load


class LimpiezaFormularioMixin:
    """
    Normaliza la entrada antes de validar.
    Los formularios multipart envían '' para los campos que el usuario dejó en blanco;
    se descartan para que cuenten como ausentes (y salte 'required' si corresponde).
    """

    @pre_load
    def limpiar_vacios(self, data, **kwargs):
        # Un cuerpo que no es objeto lo rechaza marshmallow (Invalid input type)
        if not isinstance(data, Mapping):
            return data
        limpio = {}
        for clave, valor in data.items():
            if isinstance(valor, str):
                valor = valor.strip()
                if valor == '':
                    continue
            limpio[clave] = valor
        return limpio
