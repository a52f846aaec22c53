# app/models/personal.py
from app.extensions import db
from datetime import datetime

ESTATUS_VALIDOS = ('Activo', 'Inactivo')


class Personal(db.Model):
    __tablename__ = 'personal'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Identificación
    apellido_paterno = db.Column(db.String(100), nullable=False)
    apellido_materno = db.Column(db.String(100))
    nombres = db.Column(db.String(150), nullable=False)
    curp = db.Column(db.String(18), nullable=False, unique=True)

    # Demográficos
    fecha_nacimiento = db.Column(db.Date, nullable=False)
    sexo = db.Column(db.String(20), nullable=False)
    escolaridad = db.Column(db.String(100), nullable=False)
    telefono_contacto = db.Column(db.String(20), nullable=False)

    # Datos del cargo
    fecha_ingreso = db.Column(db.Date, nullable=False)
    grado_cargo = db.Column(db.String(100), nullable=False)
    estatus = db.Column(db.String(10), nullable=False, default='Activo')

    # Ruta relativa dentro de la carpeta de uploads (ej: fotos/foto-1700000000000-42.png)
    foto_perfil = db.Column(db.String(255))

    # Auditoría
    fecha_creacion = db.Column(db.DateTime, default=datetime.utcnow)
    fecha_actualizacion = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def nombre_completo(self):
        partes = [self.nombres, self.apellido_paterno, self.apellido_materno]
        return ' '.join(p for p in partes if p)

    def __repr__(self):
        return f"<Personal {self.id} {self.curp}>"
