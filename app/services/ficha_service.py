import io
import logging
from datetime import datetime

from docx import Document

from app.services.perfil_service import PerfilService

logger = logging.getLogger(__name__)

# (título, clave en el perfil, [(encabezado, campo)])
SECCIONES_FICHA = [
    ('Evaluaciones de Control de Confianza', 'evaluaciones', [
        ('CUIP', 'cuip'), ('Tipo', 'tipo_evaluacion'), ('Fecha', 'fecha_evaluacion'),
        ('Resultado', 'resultado'), ('Vigencia', 'vigencia'),
    ]),
    ('Formación Inicial', 'formacion', [
        ('Curso', 'curso'), ('Tipo', 'tipo'), ('Institución', 'institucion'),
        ('Fecha', 'fecha'), ('Resultado', 'resultado'),
    ]),
    ('Historial Laboral', 'historial', [
        ('CUP', 'cup'), ('Función', 'funcion'), ('Dirección', 'direccion'),
        ('Periodo', 'periodo'), ('Portación de armas', 'portacion_armas_fuego'),
    ]),
    ('Incapacidades y Ausencias', 'incapacidades', [
        ('Motivo', 'motivo'), ('Fechas', 'fechas'), ('Trayectoria', 'trayectoria_institucional'),
    ]),
    ('Estímulos y Sanciones', 'estimulos', [
        ('Tipo', 'tipo'), ('Fecha', 'fecha'), ('Fundamento', 'fundamento'),
        ('Resultado', 'resultado'), ('Cumplimiento', 'cumplimiento'),
    ]),
    ('Separación del Servicio', 'separacion', [
        ('Motivo', 'motivo'), ('Fecha de baja', 'fecha_baja'),
    ]),
]

DATOS_PERSONALES = [
    ('CURP', 'curp'), ('Fecha de nacimiento', 'fecha_nacimiento'), ('Sexo', 'sexo'),
    ('Fecha de ingreso', 'fecha_ingreso'), ('Grado / Cargo', 'grado_cargo'),
    ('Escolaridad', 'escolaridad'), ('Teléfono', 'telefono_contacto'), ('Estatus', 'estatus'),
]


def _texto(valor):
    if valor is None or valor == '':
        return '-'
    if isinstance(valor, bool):
        return 'Sí' if valor else 'No'
    return str(valor)


class FichaService:

    @staticmethod
    def generar(personal_id):
        """
        Genera la ficha del elemento en Word a partir del perfil agregado.
        Devuelve (buffer, nombre_archivo).
        """
        perfil = PerfilService.obtener_perfil(personal_id)
        doc = Document()

        doc.add_heading('Expediente del Elemento', level=0)
        doc.add_heading(perfil.get('nombre_completo') or '', level=1)
        doc.add_paragraph(f"Generado el {datetime.now().strftime('%d/%m/%Y %H:%M')}")

        tabla = doc.add_table(rows=0, cols=2)
        tabla.style = 'Table Grid'
        for etiqueta, campo in DATOS_PERSONALES:
            celdas = tabla.add_row().cells
            celdas[0].text = etiqueta
            celdas[1].text = _texto(perfil.get(campo))

        for titulo, clave, columnas in SECCIONES_FICHA:
            doc.add_heading(titulo, level=2)
            registros = perfil.get(clave) or []
            if not registros:
                doc.add_paragraph('Sin registros.')
                continue

            tabla = doc.add_table(rows=1, cols=len(columnas))
            tabla.style = 'Table Grid'
            for i, (encabezado, _) in enumerate(columnas):
                tabla.rows[0].cells[i].text = encabezado
            for registro in registros:
                celdas = tabla.add_row().cells
                for i, (_, campo) in enumerate(columnas):
                    celdas[i].text = _texto(registro.get(campo))

        salida = io.BytesIO()
        doc.save(salida)
        salida.seek(0)

        nombre = f"Expediente_{perfil.get('curp') or personal_id}.docx"
        logger.info("Ficha generada para personal id=%s", personal_id)
        return salida, nombre
