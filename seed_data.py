# seed_data.py
from app import create_app
from app.extensions import db
from app.models.personal import Personal
from app.models.expediente import EvaluacionControl, HistorialLaboral, FormacionInicial
from datetime import date

# Iniciamos la app solo para tener contexto de BDD (create_app ya crea las tablas)
app = create_app()


def seed_personal():
    """Crea elementos de prueba y algunos registros de su expediente"""

    # Revisar si ya existe el elemento para no romper el script
    curp_juan = "PELJ800520HDFRPN09"
    if Personal.query.filter_by(curp=curp_juan).first():
        print("✅ Datos de personal ya existen.")
        return

    print("🌱 Creando personal de prueba...")

    # 1. Juan Pérez (Elemento con antigüedad)
    juan = Personal(
        curp=curp_juan,
        nombres="Juan Alberto",
        apellido_paterno="Pérez",
        apellido_materno="López",
        fecha_nacimiento=date(1980, 5, 20),
        sexo="Masculino",
        escolaridad="Preparatoria",
        telefono_contacto="7711234567",
        fecha_ingreso=date(2005, 3, 1),
        grado_cargo="Policía Primero"
    )

    # 2. María González (Ingreso reciente)
    maria = Personal(
        curp="GOLM950815MHGNPR04",
        nombres="María Ignacia",
        apellido_paterno="González",
        apellido_materno="Martínez",
        fecha_nacimiento=date(1995, 8, 15),
        sexo="Femenino",
        escolaridad="Licenciatura",
        telefono_contacto="7717654321",
        fecha_ingreso=date(2021, 9, 16),
        grado_cargo="Policía"
    )

    db.session.add(juan)
    db.session.add(maria)
    db.session.commit()

    print("📋 Agregando registros del expediente...")

    db.session.add(EvaluacionControl(
        personal_id=juan.id,
        cuip="23MXHGO00012543",
        tipo_evaluacion="Permanencia",
        fecha_evaluacion=date(2023, 6, 12),
        resultado="Aprobado",
        vigencia=date(2026, 6, 12)
    ))
    db.session.add(HistorialLaboral(
        personal_id=juan.id,
        funcion="Patrullaje preventivo",
        direccion="Dirección de Seguridad Pública Municipal",
        periodo="2005-2015",
        portacion_armas_fuego=True
    ))
    db.session.add(FormacionInicial(
        personal_id=maria.id,
        curso="Formación Inicial para Policía Preventivo",
        tipo="Aspirante",
        institucion="Instituto de Formación Policial",
        fecha=date(2021, 8, 30),
        resultado="Acreditado"
    ))
    db.session.commit()

    print("✅ Personal y expedientes creados exitosamente.")


if __name__ == "__main__":
    with app.app_context():
        try:
            seed_personal()
            print("\n🚀 Carga de datos finalizada correctamente.")
        except Exception as e:
            print(f"\n❌ Error durante la carga de datos: {e}")
            db.session.rollback()
