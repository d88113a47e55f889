from contentful_cma.models import (
    AssetProps,
    Collection,
    ContentTypeProps,
    EntryProps,
    SpaceProps,
    SysLink,
)


def test_entry_props_parses_sys_aliases():
    entry = EntryProps.model_validate(
        {
            "sys": {
                "id": "e1",
                "type": "Entry",
                "version": 7,
                "publishedVersion": 6,
                "createdAt": "2024-01-02T03:04:05.000Z",
                "contentType": {
                    "sys": {"type": "Link", "linkType": "ContentType", "id": "post"}
                },
            },
            "fields": {"title": {"en-US": "Hello"}},
        }
    )

    assert entry.id == "e1"
    assert entry.version == 7
    assert entry.content_type_id == "post"
    assert entry.is_published
    assert not entry.is_archived
    assert entry.sys.created_at.year == 2024


def test_asset_props_file_helpers():
    asset = AssetProps.model_validate(
        {
            "sys": {"id": "a1", "type": "Asset"},
            "fields": {
                "file": {
                    "en-US": {
                        "contentType": "image/png",
                        "fileName": "logo.png",
                        "url": "//images.ctfassets.net/logo.png",
                    }
                }
            },
        }
    )

    assert asset.file_locales == ["en-US"]
    f = asset.file_for("en-US")
    assert f.file_name == "logo.png"
    assert f.content_type == "image/png"
    assert asset.file_for("de-DE") is None


def test_space_and_content_type_props_keep_extra():
    space = SpaceProps.model_validate(
        {"sys": {"id": "s1", "type": "Space"}, "name": "Blog", "extra": 1}
    )
    assert space.name == "Blog"
    assert space.model_extra == {"extra": 1}

    ct = ContentTypeProps.model_validate(
        {"sys": {"id": "post", "type": "ContentType"}, "name": "Post"}
    )
    assert ct.fields == []
    assert ct.display_field is None


def test_sys_link_and_collection():
    link = SysLink.model_validate(
        {"sys": {"type": "Link", "linkType": "Space", "id": "s1"}}
    )
    assert link.id == "s1"

    coll = Collection[SpaceProps].model_validate(
        {
            "sys": {"type": "Array"},
            "total": 1,
            "skip": 0,
            "limit": 100,
            "items": [{"sys": {"id": "s1", "type": "Space"}, "name": "Blog"}],
        }
    )
    assert coll.total == 1
    assert coll.items[0].name == "Blog"
