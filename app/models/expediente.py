# app/models/expediente.py
# Registros hijos del expediente: cada tabla cuelga de personal.id (1:N).
# La FK no declara ON DELETE CASCADE.
from app.extensions import db
from datetime import datetime


class EvaluacionControl(db.Model):
    __tablename__ = 'evaluaciones_control'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    cuip = db.Column(db.String(15), nullable=False)
    tipo_evaluacion = db.Column(db.String(100), nullable=False)
    fecha_evaluacion = db.Column(db.Date, nullable=False)
    resultado = db.Column(db.String(50), nullable=False)
    vigencia = db.Column(db.Date, nullable=False)

    archivo_pdf = db.Column(db.String(255))
    activo = db.Column(db.Boolean, nullable=False, default=True)
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('evaluaciones_control', lazy=True))

    def __repr__(self):
        return f"<EvaluacionControl {self.cuip} - {self.resultado}>"


class FormacionInicial(db.Model):
    __tablename__ = 'formacion_inicial'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    curso = db.Column(db.String(200), nullable=False)
    tipo = db.Column(db.String(100), nullable=False)
    institucion = db.Column(db.String(200))
    fecha = db.Column(db.Date, nullable=False)
    resultado = db.Column(db.String(50), nullable=False)
    observaciones = db.Column(db.Text)

    archivo_pdf = db.Column(db.String(255))
    activo = db.Column(db.Boolean, nullable=False, default=True)
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('formacion_inicial', lazy=True))


class CompetenciaBasica(db.Model):
    __tablename__ = 'competencias_basicas'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    # Años de vigencia de la certificación
    vigencia = db.Column(db.Integer, nullable=False)
    resultado = db.Column(db.String(50), nullable=False)
    fecha = db.Column(db.Date, nullable=False)
    institucion = db.Column(db.String(200), nullable=False)
    enlaces = db.Column(db.Text)
    observaciones = db.Column(db.Text)

    archivo_pdf = db.Column(db.String(255))
    activo = db.Column(db.Boolean, nullable=False, default=True)
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('competencias_basicas', lazy=True))


# --- SUB-REGISTROS DE EVALUACIÓN DEL DESEMPEÑO ---

class HistorialLaboral(db.Model):
    __tablename__ = 'historial_laboral'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    cup = db.Column(db.String(50))
    cup_vigencia = db.Column(db.String(50))
    funcion = db.Column(db.String(200), nullable=False)
    direccion = db.Column(db.String(200))
    periodo = db.Column(db.String(100), nullable=False)
    portacion_armas_fuego = db.Column(db.Boolean, default=False)

    documento_comprobatorio = db.Column(db.String(255))
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('historial_laboral', lazy=True))


class IncapacidadAusencia(db.Model):
    __tablename__ = 'incapacidades_ausencias'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    motivo = db.Column(db.String(200), nullable=False)
    # Rango libre, ej: "2024-01-10 al 2024-01-20"
    fechas = db.Column(db.String(200), nullable=False)
    trayectoria_institucional = db.Column(db.Text)

    documentos = db.Column(db.String(255))
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('incapacidades_ausencias', lazy=True))


class EstimuloSancion(db.Model):
    __tablename__ = 'estimulos_sanciones'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    tipo = db.Column(db.String(50), nullable=False)
    fundamento = db.Column(db.Text)
    descripcion = db.Column(db.Text)
    fecha = db.Column(db.Date, nullable=False)
    motivo = db.Column(db.Text)
    resultado = db.Column(db.String(100))
    cumplimiento = db.Column(db.String(100))

    documento = db.Column(db.String(255))
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('estimulos_sanciones', lazy=True))


class SeparacionServicio(db.Model):
    __tablename__ = 'separacion_servicio'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    personal_id = db.Column(db.Integer, db.ForeignKey('personal.id'), nullable=False, index=True)

    motivo = db.Column(db.String(200), nullable=False)
    fecha_baja = db.Column(db.Date, nullable=False)

    documentos = db.Column(db.String(255))
    fecha_registro = db.Column(db.DateTime, default=datetime.utcnow)

    persona = db.relationship('Personal', backref=db.backref('separacion_servicio', lazy=True))
