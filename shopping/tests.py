from django.test import TestCase
from django.urls import reverse

from .models import ShoppingList, User


class ShoppingTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='u', email='u@example.com', password='p')

    def test_login_required(self):
        resp = self.client.get(reverse('shopping:lists'))
        self.assertEqual(resp.status_code, 401)

    def test_create_list(self):
        self.client.force_login(self.user)
        resp = self.client.post(reverse('shopping:lists'), {'name': 'Groceries'}, content_type='application/json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(ShoppingList.objects.filter(owner=self.user).count(), 1)
