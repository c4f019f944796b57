from django.urls import path
from .views import (
    CuilFormatView,
    EmergencyIntakeView,
    NurseRegistrationView,
    PatientRegistrationView,
    PendingIntakeListView,
)

urlpatterns = [
    path('cuil/format/', CuilFormatView.as_view(), name='cuil-format'),
    path('urgencias/', EmergencyIntakeView.as_view(), name='emergency-create'),
    path('urgencias/pending/', PendingIntakeListView.as_view(), name='emergency-pending'),
    path('enfermeras/', NurseRegistrationView.as_view(), name='nurse-create'),
    path('pacientes/', PatientRegistrationView.as_view(), name='patient-create'),
]
