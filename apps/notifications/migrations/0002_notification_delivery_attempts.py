from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("notifications", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="notification",
            name="delivery_attempts",
            field=models.PositiveSmallIntegerField(default=0, verbose_name="Delivery attempts"),
        ),
    ]
