# app/schemas/expediente_schema.py
from collections.abc import Mapping

from marshmallow import fields, pre_load, EXCLUDE
from app.extensions import ma
from app.models.expediente import (
    EvaluacionControl, FormacionInicial, CompetenciaBasica,
    HistorialLaboral, IncapacidadAusencia, EstimuloSancion, SeparacionServicio
)
from app.schemas.base_schema import LimpiezaFormularioMixin
from app.services import cuip


class RegistroBaseSchema(LimpiezaFormularioMixin, ma.SQLAlchemyAutoSchema):
    class Meta:
        include_fk = True
        load_instance = False
        unknown = EXCLUDE


class EvaluacionControlSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = EvaluacionControl
        dump_only = ('id', 'archivo_pdf', 'activo', 'fecha_registro')

    # Dato informativo: no bloquea el registro (ver CUIP_RECHAZAR_VENCIDA)
    es_vigente = fields.Method('calcular_vigencia', data_key='esVigente', dump_only=True)

    def calcular_vigencia(self, obj):
        return cuip.es_vigente(obj.cuip)


class FormacionInicialSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = FormacionInicial
        dump_only = ('id', 'archivo_pdf', 'activo', 'fecha_registro')


class CompetenciaBasicaSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = CompetenciaBasica
        dump_only = ('id', 'archivo_pdf', 'activo', 'fecha_registro')

    @pre_load
    def mapear_fecha_vigencia(self, data, **kwargs):
        # El formulario web envía la fecha como 'fechaVigencia'
        if isinstance(data, Mapping) and 'fecha' not in data and data.get('fechaVigencia'):
            data = dict(data)
            data['fecha'] = data.pop('fechaVigencia')
        return data


class HistorialLaboralSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = HistorialLaboral
        dump_only = ('id', 'documento_comprobatorio', 'fecha_registro')


class IncapacidadAusenciaSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = IncapacidadAusencia
        dump_only = ('id', 'documentos', 'fecha_registro')


class EstimuloSancionSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = EstimuloSancion
        dump_only = ('id', 'documento', 'fecha_registro')


class SeparacionServicioSchema(RegistroBaseSchema):
    class Meta(RegistroBaseSchema.Meta):
        model = SeparacionServicio
        dump_only = ('id', 'documentos', 'fecha_registro')
