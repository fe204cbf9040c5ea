from django import forms

from .records import (
    CATEGORY_CHOICES,
    HEALTH_CHOICES,
    STATUS_CHOICES,
    plain_number,
)


class CropForm(forms.Form):
    name = forms.CharField(label='Nombre del Cultivo', max_length=100,
                           widget=forms.TextInput(attrs={'placeholder': 'Ej: Papa Criolla'}))
    variety = forms.CharField(label='Variedad', max_length=100,
                              widget=forms.TextInput(attrs={'placeholder': 'Ej: Parda Pastusa'}))
    plantingDate = forms.DateField(label='Fecha de Siembra',
                                   widget=forms.DateInput(format='%Y-%m-%d', attrs={'type': 'date'}))
    expectedHarvestDate = forms.DateField(label='Fecha de Cosecha Esperada',
                                          widget=forms.DateInput(format='%Y-%m-%d', attrs={'type': 'date'}))
    area = forms.FloatField(label='Área (hectáreas)', widget=forms.NumberInput(attrs={'step': '0.1'}))
    yieldEstimate = forms.FloatField(label='Rendimiento Estimado (kg)', required=False, min_value=0)
    status = forms.ChoiceField(label='Estado del Cultivo', choices=STATUS_CHOICES, initial='planted')
    healthStatus = forms.ChoiceField(label='Estado de Salud', choices=HEALTH_CHOICES, initial='good')

    def clean_area(self):
        area = self.cleaned_data['area']
        # zero is a real value here, just not an acceptable one
        if area <= 0:
            raise forms.ValidationError('El área debe ser mayor que cero.')
        return area

    def clean(self):
        cleaned = super().clean()
        planted = cleaned.get('plantingDate')
        harvest = cleaned.get('expectedHarvestDate')
        if planted and harvest and harvest < planted:
            self.add_error('expectedHarvestDate', 'La cosecha no puede ser anterior a la siembra.')
        return cleaned

    def to_record(self):
        """Editable crop fields as stored, without ``id``."""
        data = self.cleaned_data
        record = {
            'name': data['name'],
            'variety': data['variety'],
            'plantingDate': data['plantingDate'].isoformat(),
            'expectedHarvestDate': data['expectedHarvestDate'].isoformat(),
            'area': plain_number(data['area']),
            'status': data['status'],
            'healthStatus': data['healthStatus'],
        }
        if data.get('yieldEstimate') is not None:
            record['yieldEstimate'] = plain_number(data['yieldEstimate'])
        return record


class InventoryItemForm(forms.Form):
    name = forms.CharField(label='Nombre', max_length=100,
                           widget=forms.TextInput(attrs={'placeholder': 'Ej: Semillas de Papa'}))
    category = forms.ChoiceField(label='Categoría', choices=CATEGORY_CHOICES, initial='seeds')
    quantity = forms.FloatField(label='Cantidad', min_value=0)
    unit = forms.CharField(label='Unidad', max_length=30,
                           widget=forms.TextInput(attrs={'placeholder': 'kg, litros, unidades'}))
    minStock = forms.FloatField(label='Stock Mínimo', min_value=0)
    supplier = forms.CharField(label='Proveedor', max_length=100, required=False)
    cost = forms.FloatField(label='Costo', required=False, min_value=0)

    def to_record(self):
        """Editable item fields as stored; ``id`` and ``lastUpdated`` are set by the screen."""
        data = self.cleaned_data
        record = {
            'name': data['name'],
            'category': data['category'],
            'quantity': plain_number(data['quantity']),
            'unit': data['unit'],
            'minStock': plain_number(data['minStock']),
        }
        if data.get('supplier'):
            record['supplier'] = data['supplier']
        if data.get('cost') is not None:
            record['cost'] = plain_number(data['cost'])
        return record
