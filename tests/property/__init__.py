"""
Property-based тесты инвариантов круговой геометрии (hypothesis).

Проверяются инварианты, которые должны выполняться для ЛЮБОГО входа:
- Нормализация в [L, H)
- Свойства pdist / sdist
- Round trip конверсии между диапазонами
- Инварианты дуг (вырожденные дуги, взаимное содержание)
"""
