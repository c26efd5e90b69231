from django.core.management.base import BaseCommand, CommandError

from school import backend
from school.backend import BACKEND_ERRORS, error_message


class Command(BaseCommand):
    help = 'Adds a Supabase user id to the admins allow-list (or removes it with --revoke)'

    def add_arguments(self, parser):
        parser.add_argument('user_id')
        parser.add_argument('--revoke', action='store_true', help='Remove the user instead')

    def handle(self, *args, **options):
        user_id = options['user_id']
        admins = backend.get_client().table('admins')
        try:
            if options['revoke']:
                admins.delete().eq('user_id', user_id).execute()
            else:
                admins.upsert({'user_id': user_id}).execute()
        except BACKEND_ERRORS as e:
            raise CommandError(error_message(e))

        action = 'Revoked' if options['revoke'] else 'Granted'
        self.stdout.write(self.style.SUCCESS(f'{action} admin access for {user_id}'))
