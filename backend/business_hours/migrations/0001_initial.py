import datetime

from django.db import migrations, models
import pytz


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BusinessHoursProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Name for this hours profile", max_length=100)),
                ("timezone", models.CharField(choices=[(tz, tz) for tz in pytz.common_timezones], default="Europe/Bucharest", help_text="Timezone the opening hours are expressed in", max_length=50)),
                ("opening_time", models.TimeField(default=datetime.time(7, 0))),
                ("closing_time", models.TimeField(default=datetime.time(17, 0), help_text="May be earlier than the opening time for hours that run past midnight")),
                ("closed_days", models.JSONField(blank=True, default=list, help_text="Weekdays the counter stays closed (0 = Monday ... 6 = Sunday)")),
                ("is_active", models.BooleanField(default=True)),
                ("is_default", models.BooleanField(default=False, help_text="Default profile used for slot filtering and the public status endpoint")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Business Hours Profile",
                "verbose_name_plural": "Business Hours Profiles",
                "ordering": ["-is_default", "name"],
            },
        ),
    ]
