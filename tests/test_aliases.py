from listql import JoinSpec, assign_aliases
from listql.core.aliases import join_alias


def test_empty_join_list():
    assert assign_aliases([]) == []


def test_aliases_follow_declaration_order():
    joins = [JoinSpec('item', 'id', 'item_id'), JoinSpec('supplier', 'id', 'supplier_id')]
    aliased = assign_aliases(joins)
    assert [a for a, _ in aliased] == ['join0_item', 'join1_supplier']
    assert [s for _, s in aliased] == joins


def test_repeated_tables_get_distinct_aliases():
    joins = [JoinSpec('item', 'id', col) for col in ('item_id', 'swap_item_id', 'parent_id', 'item_id')]
    aliases = [a for a, _ in assign_aliases(joins)]
    assert aliases == ['join0_item', 'join1_item', 'join2_item', 'join3_item']
    assert len(set(aliases)) == len(joins)


def test_custom_prefix():
    assert assign_aliases([JoinSpec('item', 'id', 'item_id')], prefix='j')[0][0] == 'j0_item'
    assert join_alias('rel', 7, 'general_settings') == 'rel7_general_settings'
