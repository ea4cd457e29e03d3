#!/usr/bin/env python3
"""
Script CLI pour recalculer les résumés d'activité quotidiens d'un utilisateur
Utile après un changement d'objectifs ou un import direct de séances en base
"""
import argparse
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

# Ajouter le répertoire backend au path pour les imports
sys.path.append(str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from app.core.database import engine
from app.domain.entities import User
from app.domain.services.activity_aggregator import activity_aggregator

# Configuration du logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Point d'entrée principal du script CLI"""
    parser = argparse.ArgumentParser(
        description="Recalcul des résumés d'activité quotidiens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemples d'utilisation:
  python recompute_activities.py --user-id 1
  python recompute_activities.py --all-users --from 2026-01-01 --to 2026-03-31
        """
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--user-id', type=int, help='Utilisateur à recalculer')
    target.add_argument('--all-users', action='store_true', help='Recalculer tous les utilisateurs')

    parser.add_argument(
        '--from', dest='date_from', type=date.fromisoformat,
        default=date.today() - timedelta(days=30),
        help='Premier jour (YYYY-MM-DD), 30 jours en arrière par défaut'
    )
    parser.add_argument(
        '--to', dest='date_to', type=date.fromisoformat,
        default=date.today(),
        help='Dernier jour inclus (YYYY-MM-DD), aujourd\'hui par défaut'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Afficher les logs détaillés')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.date_from > args.date_to:
        print("❌ Erreur: --from doit précéder --to")
        sys.exit(1)

    with Session(engine) as session:
        if args.all_users:
            user_ids = session.exec(select(User.id)).all()
        else:
            user_ids = [args.user_id]

        total_days = 0
        for user_id in user_ids:
            try:
                total_days += activity_aggregator.recompute_range(
                    session, user_id, args.date_from, args.date_to
                )
            except ValueError as e:
                print(f"❌ Utilisateur {user_id}: {e}")
                sys.exit(1)

    print(f"✅ {total_days} jours recalculés pour {len(user_ids)} utilisateur(s)")


if __name__ == "__main__":
    main()
