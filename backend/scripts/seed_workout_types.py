#!/usr/bin/env python3
"""
Script pour créer les tables et le catalogue par défaut des types de séance
"""
import sys
from pathlib import Path

# Ajouter le répertoire backend au path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlmodel import Session

from app.core.database import create_db_and_tables, engine
from app.domain.services.workout_service import workout_type_service


def main():
    """Fonction principale"""
    create_db_and_tables()
    with Session(engine) as session:
        created = workout_type_service.ensure_defaults(session)

    if created:
        print(f"✅ {created} types de séance créés")
    else:
        print("ℹ️  Types de séance déjà présents, rien à faire")
    return 0


if __name__ == "__main__":
    sys.exit(main())
