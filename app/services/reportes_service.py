# app/services/reportes_service.py
import io
import logging

import pandas as pd
from sqlalchemy import func, or_

from app.errors import ErrorValidacion
from app.extensions import db
from app.models.personal import Personal, ESTATUS_VALIDOS
from app.models.expediente import EvaluacionControl
from app.services.personal_service import PersonalService

logger = logging.getLogger(__name__)


class ReportesService:

    @staticmethod
    def _ultimo_cuip_por_personal(ids):
        """Mapa personal_id -> CUIP de la evaluación activa más reciente."""
        if not ids:
            return {}
        evaluaciones = (
            db.session.query(EvaluacionControl.personal_id, EvaluacionControl.cuip)
            .filter(EvaluacionControl.personal_id.in_(ids), EvaluacionControl.activo.is_(True))
            .order_by(EvaluacionControl.fecha_evaluacion.desc(), EvaluacionControl.id.desc())
            .all()
        )
        ultimos = {}
        for personal_id, cuip in evaluaciones:
            ultimos.setdefault(personal_id, cuip)
        return ultimos

    @staticmethod
    def buscar(termino):
        """Búsqueda por nombre completo o CURP, con el CUIP más reciente de cada elemento."""
        termino = (termino or '').strip()
        if not termino:
            raise ErrorValidacion('El término de búsqueda es requerido')

        nombre_completo = (
            Personal.nombres + ' ' + Personal.apellido_paterno + ' ' +
            func.coalesce(Personal.apellido_materno, '')
        )
        personas = (
            Personal.query
            .filter(or_(
                nombre_completo.icontains(termino, autoescape=True),
                Personal.curp.icontains(termino, autoescape=True),
            ))
            .order_by(Personal.id)
            .all()
        )

        cuips = ReportesService._ultimo_cuip_por_personal([p.id for p in personas])
        return [{
            'id': p.id,
            'nombre_completo': p.nombre_completo,
            'fecha_ingreso': p.fecha_ingreso.isoformat() if p.fecha_ingreso else None,
            'curp': p.curp,
            'foto_perfil': p.foto_perfil,
            'estatus': p.estatus,
            'cuip': cuips.get(p.id),
        } for p in personas]

    @staticmethod
    def resumen():
        """Conteo y nómina de nombres por estatus."""
        resumen = {estatus: {'count': 0, 'names': []} for estatus in ESTATUS_VALIDOS}
        personas = Personal.query.order_by(
            Personal.apellido_paterno, Personal.apellido_materno, Personal.nombres
        ).all()
        for p in personas:
            if p.estatus in resumen:
                resumen[p.estatus]['count'] += 1
                resumen[p.estatus]['names'].append(p.nombre_completo)
        return resumen

    @staticmethod
    def cambiar_estatus(personal_id, estatus):
        return PersonalService.cambiar_estatus(personal_id, estatus)

    @staticmethod
    def exportar_excel():
        """Nómina completa con estatus y último CUIP, en formato .xlsx"""
        personas = PersonalService.listar()
        cuips = ReportesService._ultimo_cuip_por_personal([p.id for p in personas])

        columnas = ['ID', 'Apellido Paterno', 'Apellido Materno', 'Nombres', 'CURP',
                    'Grado / Cargo', 'Fecha Ingreso', 'Estatus', 'CUIP']
        filas = [[
            p.id, p.apellido_paterno, p.apellido_materno or '', p.nombres, p.curp,
            p.grado_cargo, p.fecha_ingreso.isoformat() if p.fecha_ingreso else '',
            p.estatus, cuips.get(p.id) or ''
        ] for p in personas]
        df = pd.DataFrame(filas, columns=columnas)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Personal')
            worksheet = writer.sheets['Personal']
            for i, col in enumerate(df.columns):
                largo = max([len(str(v)) for v in df[col]] + [len(col)]) + 2
                worksheet.column_dimensions[chr(65 + i)].width = largo

        output.seek(0)
        logger.info("Exportación de nómina: %d registros", len(filas))
        return output
