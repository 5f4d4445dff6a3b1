import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SlotCounter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pickup_date", models.DateField()),
                ("pickup_start_minute", models.PositiveIntegerField(help_text="Minutes since midnight of pickup_date")),
                ("label", models.CharField(max_length=20)),
                ("count", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name": "Slot Counter",
                "verbose_name_plural": "Slot Counters",
                "ordering": ["pickup_date", "pickup_start_minute"],
                "constraints": [
                    models.UniqueConstraint(fields=("pickup_date", "pickup_start_minute"), name="unique_slot_counter_per_day"),
                ],
            },
        ),
    ]
