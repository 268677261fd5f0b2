# tests/core/test_config_write.py
"""
Testes de mutação do engine (set, remove, update_part, unset).

Os testes asseguram que:
- toda mutação é refletida no store (e portanto no flush)
- o part em cache é invalidado após cada mutação
- `unset` remove apenas o cache, preservando o store
- violações de tipo geram `PartTypeError`
"""

import pytest

from confd.errors import PartTypeError


def test_set_creates_part_and_is_visible(config):
    config.set("any_path", "any_key", "any_value")

    assert config.get("any_path").any_key == "any_value"
    assert config.get_changes()["any_path"] == {"any_key": "any_value"}


def test_set_evicts_cached_part(config):
    """
    Verifica que `set` invalida o part em cache.

    A próxima leitura materializa um novo Part (nova geração) contendo
    a alteração e ainda completado pelos defaults.
    """
    before = config.get("part1")

    config.set("part1", "fruit", "plum")
    after = config.get("part1")

    assert after is not before
    assert after.generation > before.generation
    assert after.fruit == "plum"
    assert after.two == "two"
    assert before.fruit == "pear"


def test_set_on_scalar_fragment_raises(tmp_path):
    from confd import Config

    conf = tmp_path / "main.yaml"
    conf.write_text("version: 3\n", encoding="utf-8")
    config = Config(conf, tmp_path)

    with pytest.raises(PartTypeError):
        config.set("version", "major", 4)


def test_remove(config):
    assert config.remove("nonexistent") is False
    assert config.remove("part2", "nonexistent") is False

    assert config.get("part2").three == 3
    assert config.remove("part2", "three") is True
    assert "three" not in config.get_changes()["part2"]
    assert "three" not in config.get("part2")

    assert config.remove("part2") is True
    assert "part2" not in config.get_changes()
    assert config.get("part2") == {}


def test_remove_example_from_raw_store(config):
    config.remove("part2", "three")
    changes = config.get_changes()["part2"]

    assert changes["four"] == 4
    assert "three" not in changes


def test_remove_does_not_touch_defaults(config):
    """Remover o override de um part faz a leitura cair nos defaults."""
    config.get("part1")
    assert config.remove("part1") is True

    assert config.get("part1") == config.get_defaults("part1")


def test_update_part_without_cache_replaces_fragment(config):
    config.update_part("part4", {"role": "guest"})

    assert config.get_changes()["part4"] == {"role": "guest"}
    assert "access" not in config.get("part4")


def test_update_part_on_cached_part_merges_into_store(config):
    """
    Verifica a sobrescrita de chaves sobre um part já materializado.

    Decisões arquiteturais:
        - A edição é gravada no store (não apenas no Part em cache)
        - O cache é invalidado; a próxima leitura reflete a edição
        - Chaves não citadas permanecem
    """
    config.get("part1")
    config["part1"] = {"fruit": "fig", "extra": True}

    assert not config.is_cached("part1")
    part1 = config.get("part1")
    assert part1.fruit == "fig"
    assert part1.extra is True
    assert part1.one == 1
    assert config.get_changes()["part1"]["fruit"] == "fig"


def test_update_part_on_cached_defaults_only_part(config):
    config.get("part3")
    config.update_part("part3", {"site": "example.org"})

    assert config.get_changes()["part3"] == {"site": "example.org"}
    assert config.get("part3").users == ["admin", "editor"]


def test_update_part_on_cached_part_requires_mapping(config):
    config.get("part1")

    with pytest.raises(PartTypeError):
        config["part1"] = ["not", "a", "dict"]


def test_unset_evicts_only_cache(config):
    part = config.get("part4")
    del config["part4"]

    assert not config.is_cached("part4")
    assert config.get_changes()["part4"] == {"access": "owner"}
    assert config.get("part4") is not part
    assert config.get("part4") == part


def test_direct_part_edits_do_not_reach_store(config):
    """Part é uma cópia: editá-lo diretamente não altera o store."""
    part = config.get("part4")
    part["access"] = "everyone"

    assert config.get_changes()["part4"]["access"] == "owner"


def test_get_changes_is_a_copy(config):
    changes = config.get_changes()
    changes["part4"]["access"] = "nobody"

    assert config.get_changes()["part4"]["access"] == "owner"


def test_set_drains_iterator_into_store(config):
    config.set("gen", "values", (n * 2 for n in range(3)))

    assert config.get("gen")["values"] == [0, 2, 4]
    assert config.get_changes()["gen"] == {"values": [0, 2, 4]}
    # a segunda leitura não encontra um gerador já consumido
    config.unset("gen")
    assert config.get("gen")["values"] == [0, 2, 4]


def test_update_part_drains_iterator(config):
    config.update_part("gen", {"values": iter(["a", "b"])})
    assert config.get_changes()["gen"] == {"values": ["a", "b"]}

    config.get("gen")
    config.update_part("gen", {"more": (c for c in "xy")})
    assert config.get("gen").more == ["x", "y"]
    assert config.get("gen")["values"] == ["a", "b"]


def test_set_keeps_no_reference_to_caller_value(config):
    cars = ["fiat"]
    config.set("part1", "cars", cars)
    cars.append("seat")

    assert config.get_changes()["part1"]["cars"] == ["fiat"]
    assert config.get("part1").cars == ["fiat"]


def test_update_part_keeps_no_reference_to_caller_value(config):
    values = {"role": "guest", "groups": ["staff"]}
    config.update_part("part4", values)
    values["groups"].append("admin")
    values["role"] = "root"

    assert config.get_changes()["part4"] == {"role": "guest", "groups": ["staff"]}


def test_raw_non_mapping_part_is_a_copy(tmp_path):
    from confd import Config

    conf = tmp_path / "main.yaml"
    conf.write_text("tags: [a, b]\n", encoding="utf-8")
    config = Config(conf, tmp_path / "config.d")

    tags = config.get("tags")
    tags.append("c")

    assert config.get("tags") == ["a", "b"]
    assert config.get_changes()["tags"] == ["a", "b"]
