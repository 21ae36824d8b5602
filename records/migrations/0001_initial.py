# Initial schema: staff users and the four record file tables

import django.contrib.auth.models
import django.contrib.auth.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='PersonalFile',
            fields=[
                ('id', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('registration_date', models.DateTimeField(db_column='registrationdate', db_index=True)),
                ('expiry_date', models.DateTimeField(db_column='expirydate', db_index=True)),
                ('name', models.CharField(max_length=255)),
                ('age', models.PositiveIntegerField()),
                ('gender', models.CharField(choices=[('Male', 'Male'), ('Female', 'Female'), ('Other', 'Other')], max_length=10)),
            ],
            options={
                'db_table': 'personal_files',
                'ordering': ['-registration_date', 'id'],
                'abstract': False,
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('registration_date__lte', models.F('expiry_date'))), name='records_personalfile_dates_ordered'),
                    models.CheckConstraint(condition=models.Q(('gender__in', ['Male', 'Female', 'Other'])), name='records_personalfile_gender_valid'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EmergencyFile',
            fields=[
                ('id', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('registration_date', models.DateTimeField(db_column='registrationdate', db_index=True)),
                ('expiry_date', models.DateTimeField(db_column='expirydate', db_index=True)),
                ('name', models.CharField(max_length=255)),
                ('age', models.PositiveIntegerField()),
                ('gender', models.CharField(choices=[('Male', 'Male'), ('Female', 'Female'), ('Other', 'Other')], max_length=10)),
            ],
            options={
                'db_table': 'emergency_files',
                'ordering': ['-registration_date', 'id'],
                'abstract': False,
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('registration_date__lte', models.F('expiry_date'))), name='records_emergencyfile_dates_ordered'),
                    models.CheckConstraint(condition=models.Q(('gender__in', ['Male', 'Female', 'Other'])), name='records_emergencyfile_gender_valid'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FamilyFile',
            fields=[
                ('id', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('registration_date', models.DateTimeField(db_column='registrationdate', db_index=True)),
                ('expiry_date', models.DateTimeField(db_column='expirydate', db_index=True)),
                ('head_name', models.CharField(db_column='headname', max_length=255)),
                ('member_count', models.PositiveIntegerField(db_column='membercount')),
            ],
            options={
                'db_table': 'family_files',
                'ordering': ['-registration_date', 'id'],
                'abstract': False,
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('registration_date__lte', models.F('expiry_date'))), name='records_familyfile_dates_ordered'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ReferralFile',
            fields=[
                ('id', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('registration_date', models.DateTimeField(db_column='registrationdate', db_index=True)),
                ('expiry_date', models.DateTimeField(db_column='expirydate', db_index=True)),
                ('referral_name', models.CharField(db_column='referralname', max_length=255)),
                ('patient_count', models.PositiveIntegerField(db_column='patientcount')),
            ],
            options={
                'db_table': 'referral_files',
                'ordering': ['-registration_date', 'id'],
                'abstract': False,
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('registration_date__lte', models.F('expiry_date'))), name='records_referralfile_dates_ordered'),
                ],
            },
        ),
    ]
