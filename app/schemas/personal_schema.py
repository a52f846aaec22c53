# app/schemas/personal_schema.py
from marshmallow import fields, validate, EXCLUDE
from app.extensions import ma
from app.models.personal import Personal
from app.schemas.base_schema import LimpiezaFormularioMixin

CURP_REGEX = r'^[A-Za-z0-9]{18}$'


class PersonalSchema(LimpiezaFormularioMixin, ma.SQLAlchemyAutoSchema):
    """Ficha del elemento policial. Se carga como diccionario; el servicio arma el modelo."""
    class Meta:
        model = Personal
        load_instance = False
        unknown = EXCLUDE
        # El estatus solo cambia por PersonalService.cambiar_estatus
        dump_only = ('id', 'estatus', 'fecha_creacion', 'fecha_actualizacion')

    curp = fields.String(
        required=True,
        validate=validate.Regexp(CURP_REGEX, error='El CURP debe tener 18 caracteres alfanuméricos')
    )
    nombre_completo = fields.String(dump_only=True)


personal_schema = PersonalSchema()
personales_schema = PersonalSchema(many=True)
